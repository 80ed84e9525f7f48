"""Attribute-based variant matching engine."""

import logging

from .comparators import (
    AliasComparator,
    AttributeComparator,
    FuzzyComparator,
    OptionalComparator,
    StrictComparator,
    VersionComparator,
    comparator_for,
)
from .components import (
    NO_MATCH,
    STRICT_MATCH,
    AttributeScore,
    Candidate,
    CandidateScore,
    MatchResult,
)
from .engine import MatchSelector, SelectorConfig, penalty_only, select, strict_then_penalty
from .exceptions import (
    AmbiguousMatchError,
    ComparatorContractError,
    MatchingError,
    NoMatchError,
    RegistryFrozenError,
)
from .registry import ComparatorRegistry
from .report import describe_result
from .scorer import score_candidate

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AliasComparator",
    "AmbiguousMatchError",
    "AttributeComparator",
    "AttributeScore",
    "Candidate",
    "CandidateScore",
    "ComparatorContractError",
    "ComparatorRegistry",
    "FuzzyComparator",
    "MatchResult",
    "MatchSelector",
    "MatchingError",
    "NO_MATCH",
    "NoMatchError",
    "OptionalComparator",
    "RegistryFrozenError",
    "STRICT_MATCH",
    "SelectorConfig",
    "StrictComparator",
    "VersionComparator",
    "comparator_for",
    "describe_result",
    "penalty_only",
    "score_candidate",
    "select",
    "strict_then_penalty",
]
