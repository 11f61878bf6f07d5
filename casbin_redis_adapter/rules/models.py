"""
Stored rule model and record codec for the Casbin Redis adapter.

A policy rule travels in three shapes:

- the engine shape: a ptype plus an ordered list of string fields,
- the stored shape: ``StoredRule``, a ptype plus six positional slots,
- the wire shape: one compact JSON object per list entry.

``StoredRule.from_rule`` and ``StoredRule.to_line`` convert between the
first two; ``dumps``/``loads`` between the last two.
"""

from typing import List, Optional, Sequence

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from shared.errors import RecordDecodeError

# Number of positional value slots a stored rule carries.
MAX_FIELDS = 6

LINE_SEPARATOR = ", "


class StoredRule(BaseModel):
    """One persisted policy line."""

    id: Optional[int] = Field(None, description="Store-assigned identity, never read back")
    ptype: str = Field(..., min_length=1, description="Policy or grouping type tag")
    v0: Optional[str] = None
    v1: Optional[str] = None
    v2: Optional[str] = None
    v3: Optional[str] = None
    v4: Optional[str] = None
    v5: Optional[str] = None

    @classmethod
    def from_rule(cls, ptype: str, rule: Sequence[str]) -> "StoredRule":
        """Build a stored rule from an engine rule.

        Fields past the sixth are dropped; the stored shape has no room
        for them.
        """
        values = {f"v{i}": value for i, value in enumerate(list(rule)[:MAX_FIELDS])}
        return cls(ptype=ptype, **values)

    def positional_values(self) -> List[Optional[str]]:
        """Return the six positional slots in order."""
        return [self.v0, self.v1, self.v2, self.v3, self.v4, self.v5]

    def to_line(self) -> str:
        """Render the policy line the engine's line loader parses.

        Every slot that is set and non-empty is included, in position
        order. A gap (``v1`` empty, ``v2`` set) does not stop the scan, so
        ``v2`` still lands in the line, one position earlier than stored.
        Records already written by other adapter versions rely on this.
        """
        parts = [self.ptype]
        parts.extend(value for value in self.positional_values() if value)
        return LINE_SEPARATOR.join(parts)

    def matches_filter(self, ptype: str, field_index: int, field_values: Sequence[str]) -> bool:
        """Positional match against a partial filter.

        ``field_values[i]`` is compared for equality with slot
        ``field_index + i``. An empty filter value matches any slot value.
        """
        if self.ptype != ptype:
            return False

        slots = self.positional_values()
        for offset, expected in enumerate(field_values):
            if expected == "":
                continue
            if slots[field_index + offset] != expected:
                return False
        return True

    def dumps(self) -> str:
        """Serialize to the wire form.

        Keys come out in declaration order and unset slots are omitted, so
        equal rules always produce byte-identical records.
        """
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def loads(cls, raw: str) -> "StoredRule":
        """Parse one wire record."""
        try:
            return cls.model_validate_json(raw)
        except PydanticValidationError as e:
            raise RecordDecodeError(
                "Malformed stored record",
                details={"record": raw, "errors": e.errors(include_url=False)}
            ) from e


def encode(ptype: str, rule: Sequence[str]) -> StoredRule:
    """Engine rule -> stored rule."""
    return StoredRule.from_rule(ptype, rule)


def decode(stored: StoredRule) -> str:
    """Stored rule -> engine policy line."""
    return stored.to_line()
