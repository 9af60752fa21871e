"""HelixGate enumerations."""

from enum import Enum


class AuditStatus(str, Enum):
    """Outcome of one proxy query attempt, stored as a single-character code."""

    SUCCESS = "S"
    ZERO_ROWS = "Z"
    FAILURE = "F"

    @classmethod
    def for_row_total(cls, row_total: int) -> "AuditStatus":
        """Status of a query that completed with ``row_total`` rows."""
        return cls.SUCCESS if row_total > 0 else cls.ZERO_ROWS
