import pytest

from attribute_matching.comparators import AttributeComparator, OptionalComparator, VersionComparator
from attribute_matching.components import Candidate
from attribute_matching.exceptions import ComparatorContractError
from attribute_matching.registry import ComparatorRegistry
from attribute_matching.scorer import score_candidate


class CountingComparator(AttributeComparator):
    name = "counting"

    def __init__(self):
        self.calls = 0

    def score(self, requested_value, candidate_value):
        self.calls += 1
        return 0 if requested_value == candidate_value else -1

    def default_value(self, requested_value):
        return None


class BrokenComparator(AttributeComparator):
    name = "broken"

    def __init__(self, score=0, default=None):
        self._score = score
        self._default = default

    def score(self, requested_value, candidate_value):
        return self._score

    def default_value(self, requested_value):
        return self._default


def test_scores_every_attribute_of_a_qualifying_candidate():
    registry = ComparatorRegistry()
    registry.register("version", VersionComparator())
    registry.register("tier", OptionalComparator(default="gold"))
    candidate = Candidate("lib", {"version": "2.1", "platform": "linux"})

    result = score_candidate(
        {"platform": "linux", "version": "2.0", "tier": "gold"}, candidate, registry
    )

    assert not result.disqualified
    assert result.as_dict() == {"platform": 0, "version": 10**12, "tier": 0}
    assert result.strict_count == 2
    assert result.penalty == 10**12
    assert result.scores["tier"].used_default
    assert result.scores["tier"].candidate_value is None
    assert result.scores["tier"].resolved_value == "gold"


def test_missing_mandatory_attribute_short_circuits():
    counting = CountingComparator()
    registry = ComparatorRegistry()
    registry.register("later", counting)
    candidate = Candidate("lib", {"later": "x"})

    result = score_candidate({"required": "x", "later": "x"}, candidate, registry)

    assert result.disqualified
    assert result.failed_attribute == "required"
    assert result.reason == "missing"
    assert list(result.scores) == ["required"]
    assert result.scores["required"].score is None
    assert counting.calls == 0


def test_incompatible_attribute_records_partial_scores():
    counting = CountingComparator()
    registry = ComparatorRegistry()
    registry.register("last", counting)
    candidate = Candidate("lib", {"first": "a", "second": "nope", "last": "z"})

    result = score_candidate({"first": "a", "second": "b", "last": "z"}, candidate, registry)

    assert result.disqualified
    assert result.reason == "incompatible"
    assert result.as_dict() == {"first": 0, "second": -1}
    assert counting.calls == 0


def test_non_integer_score_is_a_contract_violation():
    registry = ComparatorRegistry()
    registry.register("quality", BrokenComparator(score=0.5))

    with pytest.raises(ComparatorContractError) as excinfo:
        score_candidate({"quality": "high"}, Candidate("c", {"quality": "low"}), registry)

    assert excinfo.value.attribute == "quality"
    assert excinfo.value.comparator == "broken"


def test_boolean_score_is_a_contract_violation():
    registry = ComparatorRegistry()
    registry.register("quality", BrokenComparator(score=True))

    with pytest.raises(ComparatorContractError):
        score_candidate({"quality": "high"}, Candidate("c", {"quality": "low"}), registry)


def test_identical_values_must_score_zero():
    registry = ComparatorRegistry()
    registry.register("quality", BrokenComparator(score=3))

    with pytest.raises(ComparatorContractError):
        score_candidate({"quality": "high"}, Candidate("c", {"quality": "high"}), registry)


def test_non_string_default_is_a_contract_violation():
    registry = ComparatorRegistry()
    registry.register("quality", BrokenComparator(default=42))

    with pytest.raises(ComparatorContractError):
        score_candidate({"quality": "high"}, Candidate("c", {}), registry)
