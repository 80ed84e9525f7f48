from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import AmbiguousMatchError, NoMatchError
from .report import describe_result

AttributeSet = Mapping[str, str]

STRICT_MATCH = 0
NO_MATCH = -1


@dataclass(frozen=True, eq=False)
class Candidate:
    """A producer variant offered for matching.

    Candidates compare and hash by identity, so they can key dicts and sets
    even though ``attributes`` is a plain mapping.
    """

    candidate_id: str
    attributes: AttributeSet = field(default_factory=dict)
    payload: Any = field(default=None, compare=False)


@dataclass(frozen=True)
class AttributeScore:
    """Outcome of comparing one requested attribute against a candidate."""

    name: str
    requested: str
    candidate_value: Optional[str]
    resolved_value: Optional[str]
    score: Optional[int]
    used_default: bool = False

    @property
    def is_strict(self) -> bool:
        return self.score == STRICT_MATCH

    @property
    def is_compatible(self) -> bool:
        return self.score is not None and self.score > STRICT_MATCH


@dataclass
class CandidateScore:
    """Per-attribute score breakdown for a single candidate."""

    candidate: Candidate
    scores: Dict[str, AttributeScore] = field(default_factory=dict)
    disqualified: bool = False
    failed_attribute: Optional[str] = None
    reason: Optional[str] = None

    def add(self, attribute_score: AttributeScore) -> None:
        self.scores[attribute_score.name] = attribute_score

    def disqualify(self, attribute: str, reason: str) -> None:
        self.disqualified = True
        self.failed_attribute = attribute
        self.reason = reason

    @property
    def strict_count(self) -> int:
        return sum(1 for entry in self.scores.values() if entry.is_strict)

    @property
    def penalty(self) -> int:
        return sum(entry.score for entry in self.scores.values() if entry.is_compatible)

    def as_dict(self) -> Dict[str, Optional[int]]:
        return {name: entry.score for name, entry in self.scores.items()}


@dataclass
class MatchResult:
    """Winners of a selection pass plus the diagnostics that produced them."""

    winners: List[Candidate] = field(default_factory=list)
    breakdown: Dict[str, CandidateScore] = field(default_factory=dict)
    ambiguous: bool = False
    request: AttributeSet = field(default_factory=dict)
    ranking: List[CandidateScore] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return bool(self.winners)

    @property
    def best(self) -> Optional[Candidate]:
        if len(self.winners) == 1:
            return self.winners[0]
        return None

    @property
    def qualified(self) -> List[CandidateScore]:
        return list(self.ranking)

    @property
    def disqualified(self) -> List[CandidateScore]:
        return [entry for entry in self.breakdown.values() if entry.disqualified]

    def single(self) -> Candidate:
        """Return the sole winner or raise when there is none or a tie."""
        if not self.winners:
            raise NoMatchError(describe_result(self))
        if self.ambiguous:
            raise AmbiguousMatchError(describe_result(self), self.winners)
        return self.winners[0]
