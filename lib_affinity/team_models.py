"""Grouping criteria and team partition result models."""

from __future__ import annotations

from typing import Iterable, Literal

from pydantic import BaseModel, Field, model_validator


RemainderPolicy = Literal["append", "separate"]


# ---------------------------------------------------------------------------
# Criteria
# ---------------------------------------------------------------------------
# Each dimension has two opposing flags; at most one of a pair may be set.
OPPOSING_FLAGS: tuple[tuple[str, str], ...] = (
    ("diverse_departments", "similar_departments"),
    ("diverse_personality", "similar_personality"),
    ("mixed_locations", "same_location"),
    ("mixed_job_levels", "same_job_levels"),
)

CRITERIA_FLAGS: frozenset[str] = frozenset(flag for pair in OPPOSING_FLAGS for flag in pair)


class GroupingCriteria(BaseModel):
    """Resolved team grouping intent. ``confidence`` is informational only."""

    diverse_departments: bool = False
    similar_departments: bool = False
    diverse_personality: bool = False
    similar_personality: bool = False
    mixed_locations: bool = False
    same_location: bool = False
    mixed_job_levels: bool = False
    same_job_levels: bool = False
    custom_rules: list[str] = Field(default_factory=list)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_opposing_flags(self) -> GroupingCriteria:
        for first, second in OPPOSING_FLAGS:
            if getattr(self, first) and getattr(self, second):
                raise ValueError(f"{first} and {second} cannot both be set")
        return self

    @property
    def active(self) -> list[str]:
        return [flag for pair in OPPOSING_FLAGS for flag in pair if getattr(self, flag)]

    @property
    def any_diverse(self) -> bool:
        return self.diverse_departments or self.diverse_personality or self.mixed_locations


def resolve_criteria(
    assertions: Iterable[str],
    confidence: float = 1.0,
    custom_rules: Iterable[str] = (),
) -> GroupingCriteria:
    """Build consistent criteria from flag names in the order they were asserted.

    When both flags of an opposing pair are asserted, the later one wins.

    Raises:
        ValueError: If an assertion is not a known criteria flag.
    """
    partner = {}
    for first, second in OPPOSING_FLAGS:
        partner[first] = second
        partner[second] = first

    flags: dict[str, bool] = {}
    for name in assertions:
        if name not in CRITERIA_FLAGS:
            raise ValueError(f"Unknown grouping criterion: {name!r}")
        flags[name] = True
        flags[partner[name]] = False
    return GroupingCriteria(**flags, custom_rules=list(custom_rules), confidence=confidence)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
class TeamDiversity(BaseModel):
    unit_count: int = Field(default=0, ge=0)
    personality_count: int = Field(default=0, ge=0)
    location_count: int = Field(default=0, ge=0)


class Team(BaseModel):
    """One generated team."""

    team_index: int = Field(..., ge=1)
    name: str
    member_ids: list[str] = Field(default_factory=list)
    diversity: TeamDiversity = Field(default_factory=TeamDiversity)
    average_fit: float = Field(default=1.0, ge=0.0, le=1.0)

    @property
    def size(self) -> int:
        return len(self.member_ids)


class PartitionResult(BaseModel):
    """Teams plus any members left outside them (``separate`` policy only)."""

    teams: list[Team] = Field(default_factory=list)
    remainder: list[str] = Field(default_factory=list)
    team_size: int = Field(..., ge=1)
    remainder_policy: RemainderPolicy = "append"
