"""Affinity scoring between two members.

Combines embedding cosine similarity with the six sub-scores into one
weighted total, and renders a human-readable explanation of the result.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping, Sequence

import numpy as np
from pydantic import ValidationError

from lib_affinity.errors import InvalidWeightsError
from lib_affinity.member_models import (
    DEFAULT_WEIGHTS,
    AffinityScore,
    ExplanationDetail,
    MatchExplanation,
    Member,
    Preferences,
    Recommendation,
    SubScoreWeights,
)
from lib_affinity.engine.subscores import (
    common_tags,
    job_level_relationship,
    job_level_score,
    location_relationship,
    location_score,
    org_proximity_score,
    org_relationship,
    personality_score,
    preference_match,
    tag_overlap,
)
from lib_affinity.personality_types import compatibility_label

logger = logging.getLogger(__name__)

WEIGHT_SUM_TOLERANCE = 1e-3
MAX_RECOMMENDATIONS = 50

_WEIGHT_FIELDS = tuple(SubScoreWeights.model_fields)


# ---------------------------------------------------------------------------
# Embeddings
# ---------------------------------------------------------------------------
def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float | None:
    """Cosine similarity in [-1, 1], or ``None`` if the vectors are unusable."""
    a = np.asarray(vec_a, dtype=float)
    b = np.asarray(vec_b, dtype=float)
    if a.ndim != 1 or a.shape != b.shape or a.size == 0:
        return None
    norm = float(np.linalg.norm(a) * np.linalg.norm(b))
    if norm == 0.0 or not math.isfinite(norm):
        return None
    return float(np.clip(np.dot(a, b) / norm, -1.0, 1.0))


def embedding_similarity(vec_a: Sequence[float] | None, vec_b: Sequence[float] | None) -> float:
    """Cosine similarity normalised from [-1, 1] to [0, 1]; 0 when either is absent."""
    if vec_a is None or vec_b is None:
        return 0.0
    sim = cosine_similarity(vec_a, vec_b)
    if sim is None:
        return 0.0
    return (sim + 1.0) / 2.0


def field_similarities(a: Member, b: Member) -> dict[str, float]:
    """Normalised similarity of each free-text embedding present on both sides."""
    fields = {
        "collaboration": (a.collaboration_embedding, b.collaboration_embedding),
        "strengths": (a.strengths_embedding, b.strengths_embedding),
        "preferred_colleague": (a.preferred_colleague_embedding, b.preferred_colleague_embedding),
    }
    result: dict[str, float] = {}
    for name, (va, vb) in fields.items():
        if va is None or vb is None:
            continue
        sim = cosine_similarity(va, vb)
        if sim is not None:
            result[name] = (sim + 1.0) / 2.0
    return result


# ---------------------------------------------------------------------------
# Weights
# ---------------------------------------------------------------------------
def validate_weights(weights: SubScoreWeights | Mapping[str, float] | None) -> SubScoreWeights:
    """Return a checked weight set, or raise :class:`InvalidWeightsError`.

    ``None`` selects :data:`DEFAULT_WEIGHTS`. A mapping must name all seven
    dimensions. Weights are never rescaled or clamped.
    """
    if weights is None:
        return DEFAULT_WEIGHTS

    if not isinstance(weights, SubScoreWeights):
        missing = [f for f in _WEIGHT_FIELDS if f not in weights]
        if missing:
            raise InvalidWeightsError(f"Missing weights for: {', '.join(missing)}")
        try:
            weights = SubScoreWeights(**dict(weights))
        except ValidationError as exc:
            raise InvalidWeightsError(f"Invalid weights: {exc}") from exc

    values = [getattr(weights, f) for f in _WEIGHT_FIELDS]
    if any(not math.isfinite(v) or v < 0 for v in values):
        raise InvalidWeightsError("Weights must be finite and non-negative")

    total = weights.total()
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        raise InvalidWeightsError(f"Weights must sum to 1.0, got {total:.4f}")
    return weights


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------
def score_affinity(
    a: Member,
    b: Member,
    preferences: Preferences | None = None,
    weights: SubScoreWeights | Mapping[str, float] | None = None,
    diagnostics: bool = False,
) -> AffinityScore:
    """Score the ordered pair (a, b).

    ``preferences`` are ``a``'s stated preferences, matched against ``b``.

    Raises:
        InvalidWeightsError: If ``weights`` is malformed or does not sum to 1.0.
    """
    w = validate_weights(weights)

    if diagnostics and (a.embedding is None or b.embedding is None):
        logger.debug(
            "Missing primary embedding for pair %s/%s; embedding score is 0",
            a.id, b.id,
        )

    prefer_cross = preferences.prefer_cross_unit if preferences is not None else True
    embedding = embedding_similarity(a.embedding, b.embedding)
    tags = tag_overlap(a.tags, b.tags)
    personality = personality_score(a.personality, b.personality)
    job_level = job_level_score(a.job_level, b.job_level)
    org = org_proximity_score(a.org_path, b.org_path, prefer_cross=prefer_cross)
    location = location_score(a.location, b.location)
    preference = preference_match(preferences, b)

    total = (
        w.embedding * embedding
        + w.tags * tags
        + w.personality * personality
        + w.job_level * job_level
        + w.org * org
        + w.location * location
        + w.preference * preference
    )

    return AffinityScore(
        # Weights within tolerance of 1.0 can push the sum a hair past 1.
        total=min(1.0, max(0.0, total)),
        embedding=embedding,
        tags=tags,
        personality=personality,
        job_level=job_level,
        org=org,
        location=location,
        preference=preference,
    )


def recommend(
    self_member: Member,
    candidates: Sequence[Member],
    limit: int = 10,
    preferences: Preferences | None = None,
    weights: SubScoreWeights | Mapping[str, float] | None = None,
) -> list[Recommendation]:
    """Return the ``limit`` best-scoring candidates, highest total first.

    ``limit`` is clamped to [1, 50]. Ties keep input order.
    """
    w = validate_weights(weights)
    limit = max(1, min(limit, MAX_RECOMMENDATIONS))

    scored = [
        Recommendation(member_id=c.id, score=score_affinity(self_member, c, preferences, w))
        for c in candidates
        if c.id != self_member.id
    ]
    scored.sort(key=lambda r: r.score.total, reverse=True)
    logger.debug("Scored %d candidates for %s", len(scored), self_member.id)
    return scored[:limit]


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
_PERSONALITY_HIGHLIGHT = 0.75
_JOB_LEVEL_HIGHLIGHT = 0.8
_ORG_HIGHLIGHT = 0.8
_EMBEDDING_HIGHLIGHT = 0.6
_MAX_HIGHLIGHTS = 3

_TAG_STARTERS: dict[str, str] = {
    "running": "Where do you usually go running?",
    "hiking": "Climbed any good trails lately?",
    "reading": "What are you reading at the moment?",
    "gaming": "What have you been playing recently?",
    "side_projects": "Working on any side projects right now?",
    "coffee_chat": "Up for a coffee chat sometime this week?",
    "travel": "Been anywhere interesting recently?",
    "music": "What have you had on repeat lately?",
    "cooking": "Cooked anything new recently?",
    "movies": "Seen a good film lately?",
}

_DEFAULT_STARTERS = (
    "What are you mostly working on these days?",
    "What has been your most enjoyable project here so far?",
)


def _summary(total: float) -> str:
    if total >= 0.75:
        return "A very strong colleague match"
    if total >= 0.6:
        return "A good networking opportunity"
    if total >= 0.45:
        return "A chance to gain a fresh perspective"
    return "A way to broaden your network"


def _embedding_label(score: float) -> str:
    if score >= 0.7:
        return "very similar"
    if score >= 0.5:
        return "similar"
    return "average"


def conversation_starters(a: Member, b: Member, score: AffinityScore | None = None) -> list[str]:
    """Up to three opening questions for ``a`` to ask ``b``."""
    starters: list[str] = []
    for tag in common_tags(a.tags, b.tags):
        starter = _TAG_STARTERS.get(tag.lower())
        if starter:
            starters.append(starter)

    job = score.job_level if score is not None else job_level_score(a.job_level, b.job_level)
    if job >= _JOB_LEVEL_HIGHLIGHT and b.job_level:
        starters.append(f"As a {b.job_level.replace('_', ' ')}, what trends are you following?")

    personality = score.personality if score is not None else personality_score(a.personality, b.personality)
    if a.personality and b.personality and personality >= 0.8:
        starters.append(f"As an {b.personality}, how do you like to work in a team?")

    if not starters:
        starters.extend(_DEFAULT_STARTERS)
    return starters[:_MAX_HIGHLIGHTS]


def explain_match(a: Member, b: Member, score: AffinityScore) -> MatchExplanation:
    """Highlights, a per-dimension breakdown and conversation starters."""
    highlights: list[str] = []
    details: list[ExplanationDetail] = []
    shared = common_tags(a.tags, b.tags)

    if shared:
        highlights.append(f"Shared interests: {', '.join(shared)}")

    if a.personality and b.personality:
        label = compatibility_label(a.personality, b.personality)
        if score.personality >= _PERSONALITY_HIGHLIGHT:
            highlights.append(f"Personality {label} ({a.personality}-{b.personality})")
        details.append(ExplanationDetail(label="Personality", value=label, score=score.personality))

    job_desc = job_level_relationship(a.job_level, b.job_level)
    if score.job_level >= _JOB_LEVEL_HIGHLIGHT:
        highlights.append(job_desc.capitalize())
    details.append(ExplanationDetail(label="Job level", value=job_desc, score=score.job_level))

    org_desc = org_relationship(a.org_path, b.org_path)
    if score.org >= _ORG_HIGHLIGHT:
        highlights.append(org_desc.capitalize())
    details.append(ExplanationDetail(label="Organization", value=org_desc, score=score.org))

    details.append(ExplanationDetail(
        label="Location",
        value=location_relationship(a.location, b.location),
        score=score.location,
    ))

    if score.embedding >= _EMBEDDING_HIGHLIGHT:
        highlights.append("Compatible collaboration styles")
    details.append(ExplanationDetail(
        label="Collaboration style",
        value=_embedding_label(score.embedding),
        score=score.embedding,
    ))

    details.append(ExplanationDetail(
        label="Shared interests",
        value=f"{len(shared)} in common" if shared else "none in common",
        score=score.tags,
    ))

    return MatchExplanation(
        summary=_summary(score.total),
        highlights=highlights[:_MAX_HIGHLIGHTS],
        details=details,
        common_tags=shared,
        conversation_starters=conversation_starters(a, b, score),
    )
