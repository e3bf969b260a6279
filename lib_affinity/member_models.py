"""Member profiles, caller preferences, weights and affinity results."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from lib_affinity.org_structure import parse_org_path
from lib_affinity.personality_types import normalize_code


MAX_TAGS = 10


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------
class Member(BaseModel):
    """An organization participant as supplied by the caller."""

    id: str = Field(..., min_length=1)
    name: str = Field(default="", max_length=100)
    org_path: list[str] = Field(default_factory=list)
    job_level: str | None = None
    location: str | None = None
    personality: str | None = None
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)
    embedding: list[float] | None = None
    collaboration_embedding: list[float] | None = None
    strengths_embedding: list[float] | None = None
    preferred_colleague_embedding: list[float] | None = None

    @field_validator("org_path", mode="before")
    @classmethod
    def _split_path(cls, value: object) -> object:
        if value is None or isinstance(value, (str, list, tuple)):
            return list(parse_org_path(value))  # type: ignore[arg-type]
        return value

    @field_validator("personality", mode="before")
    @classmethod
    def _upper_personality(cls, value: object) -> object:
        if value is None or isinstance(value, str):
            return normalize_code(value)
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _dedupe_tags(cls, value: object) -> object:
        if isinstance(value, (list, tuple, set, frozenset)):
            seen: dict[str, None] = {}
            for tag in value:
                if isinstance(tag, str) and tag.strip():
                    seen.setdefault(tag.strip(), None)
            return list(seen)
        return value

    @property
    def top_unit(self) -> str | None:
        return self.org_path[0] if self.org_path else None


class Preferences(BaseModel):
    """What a member says they look for in colleagues."""

    units: list[str] = Field(default_factory=list)
    job_levels: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    personalities: list[str] = Field(default_factory=list)
    prefer_cross_unit: bool = True


class SubScoreWeights(BaseModel):
    """Per-dimension weights; the engine requires them to sum to 1.0."""

    embedding: float = Field(default=0.30, ge=0.0)
    tags: float = Field(default=0.25, ge=0.0)
    personality: float = Field(default=0.12, ge=0.0)
    job_level: float = Field(default=0.10, ge=0.0)
    org: float = Field(default=0.08, ge=0.0)
    location: float = Field(default=0.05, ge=0.0)
    preference: float = Field(default=0.10, ge=0.0)

    model_config = {"frozen": True}

    def total(self) -> float:
        return (
            self.embedding + self.tags + self.personality + self.job_level
            + self.org + self.location + self.preference
        )


DEFAULT_WEIGHTS = SubScoreWeights()


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
class AffinityScore(BaseModel):
    """Weighted total for one ordered member pair plus its sub-scores."""

    total: float = Field(ge=0.0, le=1.0)
    embedding: float = Field(ge=0.0, le=1.0)
    tags: float = Field(ge=0.0, le=1.0)
    personality: float = Field(ge=0.0, le=1.0)
    job_level: float = Field(ge=0.0, le=1.0)
    org: float = Field(ge=0.0, le=1.0)
    location: float = Field(ge=0.0, le=1.0)
    preference: float = Field(ge=0.0, le=1.0)


class ExplanationDetail(BaseModel):
    """One row of the per-dimension breakdown table."""

    label: str
    value: str
    score: float = Field(ge=0.0, le=1.0)


class MatchExplanation(BaseModel):
    """Human-readable summary of why two members were matched."""

    summary: str
    highlights: list[str] = Field(default_factory=list, max_length=3)
    details: list[ExplanationDetail] = Field(default_factory=list)
    common_tags: list[str] = Field(default_factory=list)
    conversation_starters: list[str] = Field(default_factory=list, max_length=3)


class Recommendation(BaseModel):
    """A scored candidate returned by :func:`recommend`."""

    member_id: str
    score: AffinityScore
