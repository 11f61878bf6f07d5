"""
Rule record package.

Defines the fixed-shape record a policy line is persisted as, and the
codec between that record, the engine's rule lists and the policy text
lines the engine loads.

Modules of interest:
- models: StoredRule plus the encode/decode pair and the wire format.
"""

from .models import StoredRule, encode, decode, MAX_FIELDS

__all__ = ["StoredRule", "encode", "decode", "MAX_FIELDS"]
