"""Tests for lib_affinity/engine/affinity.py: weighted scoring, explanations, recommendations."""

import pytest

from lib_affinity.engine.affinity import (
    MAX_RECOMMENDATIONS,
    cosine_similarity,
    embedding_similarity,
    explain_match,
    field_similarities,
    recommend,
    score_affinity,
    validate_weights,
)
from lib_affinity.errors import AffinityError, InvalidWeightsError
from lib_affinity.member_models import DEFAULT_WEIGHTS, Member, Preferences, SubScoreWeights


def _weights(**overrides):
    values = DEFAULT_WEIGHTS.model_dump()
    values.update(overrides)
    return values


# ---------------------------------------------------------------------------
# Embeddings
# ---------------------------------------------------------------------------


class TestEmbeddingSimilarity:
    def test_identical(self):
        assert embedding_similarity([1.0, 0.0], [2.0, 0.0]) == pytest.approx(1.0)

    def test_opposite(self):
        assert embedding_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(0.0)

    def test_orthogonal(self):
        assert embedding_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.5)

    def test_absent_is_zero(self):
        assert embedding_similarity(None, [1.0, 0.0]) == 0.0

    def test_unusable_vectors_are_zero(self):
        assert embedding_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0
        assert embedding_similarity([1.0, 0.0], [1.0, 0.0, 0.0]) == 0.0
        assert cosine_similarity([], []) is None

    def test_field_similarities_only_shared_fields(self):
        a = Member(id="a", collaboration_embedding=[1.0, 0.0], strengths_embedding=[1.0, 0.0])
        b = Member(id="b", collaboration_embedding=[1.0, 0.0])
        assert field_similarities(a, b) == {"collaboration": pytest.approx(1.0)}


# ---------------------------------------------------------------------------
# Weights
# ---------------------------------------------------------------------------


class TestValidateWeights:
    def test_none_gives_defaults(self):
        assert validate_weights(None) is DEFAULT_WEIGHTS

    def test_within_tolerance(self):
        """0.999999 is accepted as-is, not rescaled."""
        w = validate_weights(_weights(embedding=0.299999))
        assert w.embedding == 0.299999

    def test_sum_too_low(self):
        with pytest.raises(InvalidWeightsError):
            validate_weights(_weights(embedding=0.2))

    def test_sum_too_high(self):
        with pytest.raises(InvalidWeightsError):
            validate_weights(SubScoreWeights(embedding=0.5))

    def test_negative(self):
        with pytest.raises(InvalidWeightsError):
            validate_weights(_weights(embedding=-0.1, tags=0.65))

    def test_missing_dimension(self):
        values = _weights()
        del values["preference"]
        with pytest.raises(InvalidWeightsError, match="preference"):
            validate_weights(values)

    def test_is_a_value_error(self):
        assert issubclass(InvalidWeightsError, AffinityError)
        assert issubclass(InvalidWeightsError, ValueError)


# ---------------------------------------------------------------------------
# score_affinity
# ---------------------------------------------------------------------------


class TestScoreAffinity:
    def test_empty_profiles(self):
        """No data anywhere: embedding and tags are 0, everything else neutral."""
        score = score_affinity(Member(id="a"), Member(id="b"))
        assert score.embedding == 0.0
        assert score.tags == 0.0
        assert score.personality == 0.5
        assert score.job_level == 0.5
        assert score.org == 0.5
        assert score.location == 0.5
        assert score.preference == 0.5
        # 0.5 × (0.12 + 0.10 + 0.08 + 0.05 + 0.10)
        assert score.total == pytest.approx(0.225)

    def test_weighted_sum(self):
        a = Member(
            id="a",
            org_path="CTO > Platform",
            job_level="manager",
            location="seoul_hq",
            personality="INTJ",
            tags=["running", "music"],
            embedding=[1.0, 0.0],
        )
        b = Member(
            id="b",
            org_path="CTO > Security",
            job_level="assistant_manager",
            location="seoul_hq",
            personality="ENTP",
            tags=["running"],
            embedding=[1.0, 0.0],
        )
        score = score_affinity(a, b)
        expected = (
            0.30 * 1.0     # embedding
            + 0.25 * 0.5   # tags 1/2
            + 0.12 * 1.0   # INTJ → ENTP
            + 0.10 * 1.0   # one rank apart
            + 0.08 * 0.8   # same top unit, cross preferred
            + 0.05 * 1.0   # same office
            + 0.10 * 0.5   # no preferences
        )
        assert score.total == pytest.approx(expected)

    def test_preferences_apply_to_candidate(self):
        a = Member(id="a", org_path=["CTO", "Platform"])
        b = Member(id="b", org_path=["CTO", "Platform"], location="busan")
        prefs = Preferences(locations=["busan"], prefer_cross_unit=False)
        score = score_affinity(a, b, preferences=prefs)
        assert score.preference == 1.0
        assert score.org == 0.6

    def test_total_bounded(self):
        a = Member(id="a", tags=["x"], embedding=[1.0, 1.0], personality="INTJ")
        b = Member(id="b", tags=["x"], embedding=[1.0, 1.0], personality="ENTP")
        score = score_affinity(a, b, weights=_weights(embedding=0.3005))
        assert 0.0 <= score.total <= 1.0

    def test_rejects_bad_weights(self):
        with pytest.raises(InvalidWeightsError):
            score_affinity(Member(id="a"), Member(id="b"), weights=_weights(tags=0.0))


# ---------------------------------------------------------------------------
# recommend
# ---------------------------------------------------------------------------


class TestRecommend:
    def _population(self):
        me = Member(id="me", tags=["running", "music"])
        return me, [
            me,
            Member(id="none"),
            Member(id="both", tags=["running", "music"]),
            Member(id="one", tags=["running"]),
        ]

    def test_excludes_self_and_sorts(self):
        me, candidates = self._population()
        result = recommend(me, candidates)
        assert [r.member_id for r in result] == ["both", "one", "none"]

    def test_limit_clamped(self):
        me, candidates = self._population()
        assert len(recommend(me, candidates, limit=0)) == 1
        assert len(recommend(me, candidates, limit=MAX_RECOMMENDATIONS + 10)) == 3


# ---------------------------------------------------------------------------
# explain_match
# ---------------------------------------------------------------------------


class TestExplainMatch:
    def test_highlights_and_details(self):
        a = Member(
            id="a",
            org_path="CTO > Platform",
            job_level="manager",
            personality="INTJ",
            tags=["running", "hiking"],
        )
        b = Member(
            id="b",
            org_path="CSO",
            job_level="assistant_manager",
            personality="ENTP",
            tags=["hiking", "running"],
        )
        score = score_affinity(a, b)
        explanation = explain_match(a, b, score)

        assert explanation.common_tags == ["running", "hiking"]
        assert explanation.highlights[0] == "Shared interests: running, hiking"
        assert len(explanation.highlights) == 3
        labels = [d.label for d in explanation.details]
        assert labels == [
            "Personality",
            "Job level",
            "Organization",
            "Location",
            "Collaboration style",
            "Shared interests",
        ]
        assert explanation.conversation_starters[0] == "Where do you usually go running?"
        assert len(explanation.conversation_starters) <= 3

    def test_fallback_starters(self):
        a, b = Member(id="a"), Member(id="b")
        explanation = explain_match(a, b, score_affinity(a, b))
        assert explanation.highlights == []
        assert len(explanation.conversation_starters) == 2
        assert explanation.summary == "A way to broaden your network"
