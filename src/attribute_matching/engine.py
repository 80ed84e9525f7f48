from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, List, Sequence, Tuple

from .components import AttributeSet, Candidate, CandidateScore, MatchResult
from .registry import ComparatorRegistry
from .scorer import score_candidate

logger = logging.getLogger(__name__)

AggregationPolicy = Callable[[CandidateScore], Tuple]


def strict_then_penalty(score: CandidateScore) -> Tuple[int, int]:
    """More strict matches first, then the smaller total compatibility penalty."""
    return (-score.strict_count, score.penalty)


def penalty_only(score: CandidateScore) -> Tuple[int]:
    return (score.penalty,)


@dataclass
class SelectorConfig:
    aggregation: AggregationPolicy = strict_then_penalty
    max_workers: int = 1
    parallel_threshold: int = 32
    freeze_registry: bool = True


class MatchSelector:
    def __init__(
        self, registry: ComparatorRegistry, config: SelectorConfig | None = None
    ) -> None:
        self.registry = registry
        self.config = config or SelectorConfig()
        if self.config.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.config.freeze_registry:
            self.registry.freeze()

    def score_all(
        self, request: AttributeSet, candidates: Sequence[Candidate]
    ) -> List[CandidateScore]:
        if self.config.max_workers > 1 and len(candidates) >= self.config.parallel_threshold:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                # map() preserves input order.
                return list(
                    executor.map(
                        lambda candidate: score_candidate(request, candidate, self.registry),
                        candidates,
                    )
                )
        return [score_candidate(request, candidate, self.registry) for candidate in candidates]

    def select(
        self, request: AttributeSet, candidates: Iterable[Candidate]
    ) -> MatchResult:
        candidates = list(candidates)
        seen = set()
        for candidate in candidates:
            if candidate.candidate_id in seen:
                raise ValueError(f"duplicate candidate id '{candidate.candidate_id}'")
            seen.add(candidate.candidate_id)

        scores = self.score_all(request, candidates)
        result = MatchResult(
            request=dict(request),
            breakdown={entry.candidate.candidate_id: entry for entry in scores},
        )

        qualified = [entry for entry in scores if not entry.disqualified]
        if not qualified:
            logger.debug("No candidate matched request %r out of %d", dict(request), len(candidates))
            return result

        keyed = [(self.config.aggregation(entry), entry) for entry in qualified]
        # sorted() is stable, so equal keys keep candidate order.
        keyed.sort(key=lambda item: item[0])
        result.ranking = [entry for _, entry in keyed]

        best_key = keyed[0][0]
        result.winners = [entry.candidate for key, entry in keyed if key == best_key]
        result.ambiguous = len(result.winners) > 1

        logger.debug(
            "Selected %s with key %r (ambiguous=%s)",
            [candidate.candidate_id for candidate in result.winners],
            best_key,
            result.ambiguous,
        )
        return result


def select(
    request: AttributeSet,
    candidates: Iterable[Candidate],
    registry: ComparatorRegistry,
    config: SelectorConfig | None = None,
) -> MatchResult:
    """One-shot selection; the caller's registry is left open for registration."""
    if not registry.frozen:
        registry = registry.copy().freeze()
    return MatchSelector(registry, config).select(request, candidates)
