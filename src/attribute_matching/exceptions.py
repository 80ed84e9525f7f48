from __future__ import annotations

from typing import Any, Sequence


class MatchingError(Exception):
    """Base class for attribute matching errors."""


class ComparatorContractError(MatchingError):
    """Raised when a comparator returns a value outside its contract."""

    def __init__(self, attribute: str, comparator: str, message: str) -> None:
        super().__init__(f"comparator '{comparator}' for attribute '{attribute}' {message}")
        self.attribute = attribute
        self.comparator = comparator


class RegistryFrozenError(MatchingError):
    """Raised when registering a comparator on a frozen registry."""


class NoMatchError(MatchingError):
    pass


class AmbiguousMatchError(MatchingError):
    def __init__(self, message: str, candidates: Sequence[Any] = ()) -> None:
        super().__init__(message)
        self.candidates = list(candidates)
