from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional, Tuple

from rapidfuzz import fuzz

from .components import NO_MATCH, STRICT_MATCH

VERSION_PATTERN = re.compile(r"^v?(\d+(?:\.\d+)*)$")
VERSION_DEPTH = 4
VERSION_COMPONENT_LIMIT = 10**6


class AttributeComparator(ABC):
    """Scores a requested attribute value against a candidate value.

    ``score`` returns 0 for a strict match, a negative value when the values
    are incompatible and a positive value for a compatible match, smaller
    being closer. ``default_value`` supplies the value used for a candidate
    that does not declare the attribute; ``None`` makes the attribute
    mandatory. Implementations must be pure.
    """

    name: str

    @abstractmethod
    def score(self, requested_value: str, candidate_value: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def default_value(self, requested_value: str) -> Optional[str]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class StrictComparator(AttributeComparator):
    name = "strict"

    def score(self, requested_value: str, candidate_value: str) -> int:
        return STRICT_MATCH if requested_value == candidate_value else NO_MATCH

    def default_value(self, requested_value: str) -> Optional[str]:
        return None


class OptionalComparator(StrictComparator):
    """Strict equality, but candidates may omit the attribute.

    A missing attribute resolves to ``default`` when one is configured and to
    the requested value otherwise, so omission counts as a strict match.
    """

    name = "optional"

    def __init__(self, default: Optional[str] = None) -> None:
        self.default = default

    def default_value(self, requested_value: str) -> Optional[str]:
        if self.default is None:
            return requested_value
        return self.default

    def __repr__(self) -> str:
        return f"OptionalComparator(default={self.default!r})"


class AliasComparator(AttributeComparator):
    """Treats values in the same alias group as compatible."""

    name = "alias"

    def __init__(
        self,
        groups: Iterable[Iterable[str]] = (),
        default: Optional[str] = None,
        alias_score: int = 1,
    ) -> None:
        if alias_score < 1:
            raise ValueError("alias_score must be positive")
        self.default = default
        self.alias_score = alias_score
        self._group_of: Dict[str, int] = {}
        for index, group in enumerate(groups):
            for value in group:
                if value in self._group_of and self._group_of[value] != index:
                    raise ValueError(f"value '{value}' appears in more than one alias group")
                self._group_of[value] = index

    def score(self, requested_value: str, candidate_value: str) -> int:
        if requested_value == candidate_value:
            return STRICT_MATCH
        group = self._group_of.get(requested_value)
        if group is not None and group == self._group_of.get(candidate_value):
            return self.alias_score
        return NO_MATCH

    def default_value(self, requested_value: str) -> Optional[str]:
        return self.default

    def __repr__(self) -> str:
        return f"AliasComparator(groups={len(set(self._group_of.values()))}, default={self.default!r})"


def parse_version(value: str) -> Optional[Tuple[int, ...]]:
    match = VERSION_PATTERN.match(value.strip())
    if not match:
        return None
    parts = tuple(int(part) for part in match.group(1).split("."))
    if len(parts) > VERSION_DEPTH or any(part >= VERSION_COMPONENT_LIMIT for part in parts):
        return None
    return parts


def encode_version(parts: Tuple[int, ...]) -> int:
    """Map a parsed version to an integer that sorts in version order."""
    padded = parts + (0,) * (VERSION_DEPTH - len(parts))
    encoded = 0
    for part in padded:
        encoded = encoded * VERSION_COMPONENT_LIMIT + part
    return encoded


class VersionComparator(AttributeComparator):
    """Dotted numeric versions within the same major line are compatible.

    An equal version is a strict match. A newer candidate in the requested
    major line scores by its distance from the request in version order,
    so "2.6.0" is closer to "2.5.9" than "2.6.9" is. Older candidates are
    rejected unless ``accept_older`` is set. Values that do not parse as
    versions (more than four components, or a component of a million or
    more) only match when they are identical.
    """

    name = "version"

    def __init__(self, accept_older: bool = False, default: Optional[str] = None) -> None:
        self.accept_older = accept_older
        self.default = default

    def score(self, requested_value: str, candidate_value: str) -> int:
        if requested_value == candidate_value:
            return STRICT_MATCH
        requested = parse_version(requested_value)
        offered = parse_version(candidate_value)
        if requested is None or offered is None:
            return NO_MATCH
        distance = encode_version(offered) - encode_version(requested)
        if distance == 0:
            # "2" and "2.0" name the same version.
            return STRICT_MATCH
        if requested[0] != offered[0]:
            return NO_MATCH
        if distance < 0 and not self.accept_older:
            return NO_MATCH
        return abs(distance)

    def default_value(self, requested_value: str) -> Optional[str]:
        return self.default

    def __repr__(self) -> str:
        return f"VersionComparator(accept_older={self.accept_older}, default={self.default!r})"


class FuzzyComparator(AttributeComparator):
    """Scores free-text values by token similarity."""

    name = "fuzzy"

    def __init__(self, minimum_ratio: float = 85.0, default: Optional[str] = None) -> None:
        if not 0.0 < minimum_ratio <= 100.0:
            raise ValueError("minimum_ratio must be in (0, 100]")
        self.minimum_ratio = minimum_ratio
        self.default = default

    def score(self, requested_value: str, candidate_value: str) -> int:
        if requested_value == candidate_value:
            return STRICT_MATCH
        if not requested_value or not candidate_value:
            return NO_MATCH
        ratio = fuzz.token_sort_ratio(requested_value, candidate_value)
        if ratio < self.minimum_ratio:
            return NO_MATCH
        return max(1, int(round(100 - ratio)))

    def default_value(self, requested_value: str) -> Optional[str]:
        return self.default

    def __repr__(self) -> str:
        return f"FuzzyComparator(minimum_ratio={self.minimum_ratio}, default={self.default!r})"


DEFAULT_COMPARATOR = StrictComparator()

COMPARATOR_TYPES = {
    comparator.name: comparator
    for comparator in (
        StrictComparator,
        OptionalComparator,
        AliasComparator,
        VersionComparator,
        FuzzyComparator,
    )
}


def comparator_for(tag: str) -> AttributeComparator:
    """Instantiate the comparator registered under ``tag`` with its defaults."""
    try:
        comparator_type = COMPARATOR_TYPES[tag]
    except KeyError:
        raise ValueError(f"unknown comparator '{tag}'") from None
    return comparator_type()
