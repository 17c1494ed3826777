"""Core enumerations.

Key Types:
    - IteratorType: Initial-position policy used when seeding shard iterators
"""

from enum import Enum


class IteratorType(str, Enum):
    """Where a shard's read position starts.

    Values match the service's ``ShardIteratorType`` wire strings so members can
    be sent as-is.
    """

    AT_SEQUENCE_NUMBER = "AT_SEQUENCE_NUMBER"
    AFTER_SEQUENCE_NUMBER = "AFTER_SEQUENCE_NUMBER"
    AT_TIMESTAMP = "AT_TIMESTAMP"
    TRIM_HORIZON = "TRIM_HORIZON"
    LATEST = "LATEST"

    @property
    def requires_sequence_number(self) -> bool:
        return self in (IteratorType.AT_SEQUENCE_NUMBER, IteratorType.AFTER_SEQUENCE_NUMBER)

    @property
    def requires_timestamp(self) -> bool:
        return self is IteratorType.AT_TIMESTAMP

    @classmethod
    def from_string(cls, value: str) -> "IteratorType":
        """Parse an iterator type, accepting any case and dashes.

        Examples:
            >>> IteratorType.from_string("trim-horizon")
            <IteratorType.TRIM_HORIZON: 'TRIM_HORIZON'>
        """
        normalized = value.strip().upper().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Invalid iterator type: {value!r}. Valid: {valid}") from None
