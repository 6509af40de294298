"""Exception hierarchy for reward flight searches."""
from __future__ import annotations


class RewardSearchError(RuntimeError):
    """Raised when a search could not be answered."""


class DataAccessError(RewardSearchError):
    """Raised when the count or page query fails against the store."""


class MappingError(RewardSearchError):
    """Raised when a required column of a result row cannot be read."""

    def __init__(self, column: str, value: object = None) -> None:
        super().__init__(f"unreadable value for column '{column}': {value!r}")
        self.column = column
        self.value = value


class InvalidPageRequestError(ValueError):
    """Raised for a page number below zero or a page size below one."""
