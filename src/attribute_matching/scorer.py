from __future__ import annotations

import logging
from typing import Optional

from .comparators import AttributeComparator
from .components import AttributeScore, AttributeSet, Candidate, CandidateScore, STRICT_MATCH
from .exceptions import ComparatorContractError
from .registry import ComparatorRegistry

logger = logging.getLogger(__name__)

REASON_MISSING = "missing"
REASON_INCOMPATIBLE = "incompatible"


def _comparator_name(comparator: AttributeComparator) -> str:
    return getattr(comparator, "name", None) or type(comparator).__name__


def _checked_default(
    attribute: str, comparator: AttributeComparator, requested: str
) -> Optional[str]:
    value = comparator.default_value(requested)
    if value is not None and not isinstance(value, str):
        raise ComparatorContractError(
            attribute,
            _comparator_name(comparator),
            f"returned a default of type {type(value).__name__}, expected str or None",
        )
    return value


def _checked_score(
    attribute: str, comparator: AttributeComparator, requested: str, resolved: str
) -> int:
    score = comparator.score(requested, resolved)
    # bool is an int subclass but never a meaningful score.
    if isinstance(score, bool) or not isinstance(score, int):
        raise ComparatorContractError(
            attribute,
            _comparator_name(comparator),
            f"returned a score of type {type(score).__name__}, expected int",
        )
    if requested == resolved and score != STRICT_MATCH:
        raise ComparatorContractError(
            attribute,
            _comparator_name(comparator),
            f"scored identical values {requested!r} as {score}, expected {STRICT_MATCH}",
        )
    return score


def score_candidate(
    request: AttributeSet,
    candidate: Candidate,
    registry: ComparatorRegistry,
) -> CandidateScore:
    """Score every requested attribute of ``candidate``.

    Evaluation stops at the first attribute that disqualifies the candidate,
    either because it is missing with no default or because its comparator
    reports an incompatible value. The failing attribute is still recorded.
    """

    result = CandidateScore(candidate=candidate)

    for name, requested in request.items():
        comparator = registry.resolve(name)
        offered = candidate.attributes.get(name)
        resolved = offered
        used_default = False

        if offered is None:
            resolved = _checked_default(name, comparator, requested)
            used_default = resolved is not None
            if resolved is None:
                result.add(
                    AttributeScore(
                        name=name,
                        requested=requested,
                        candidate_value=None,
                        resolved_value=None,
                        score=None,
                    )
                )
                result.disqualify(name, REASON_MISSING)
                logger.debug(
                    "Candidate %s disqualified: missing mandatory attribute %r",
                    candidate.candidate_id,
                    name,
                )
                break

        score = _checked_score(name, comparator, requested, resolved)
        result.add(
            AttributeScore(
                name=name,
                requested=requested,
                candidate_value=offered,
                resolved_value=resolved,
                score=score,
                used_default=used_default,
            )
        )
        if score < STRICT_MATCH:
            result.disqualify(name, REASON_INCOMPATIBLE)
            logger.debug(
                "Candidate %s disqualified: %r requested %r, got %r",
                candidate.candidate_id,
                name,
                requested,
                resolved,
            )
            break

    return result
