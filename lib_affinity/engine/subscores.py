"""Per-dimension sub-score functions.

Every function is total: it returns a value in [0, 1] and never raises.
Missing data on either side yields the neutral 0.5 unless noted otherwise.
All functions are *pure*.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from lib_affinity.job_levels import (
    CROSS_TRACK_PAIRS,
    Position,
    is_complementary,
    resolve_job_level,
)
from lib_affinity.locations import (
    CAPITAL_AREA,
    OVERSEAS,
    REGIONAL_METRO,
    REMOTE,
    normalize_location,
)
from lib_affinity.member_models import Member, Preferences
from lib_affinity.org_structure import has_high_synergy, parse_org_path
from lib_affinity.personality_types import (
    NEUTRAL_SCORE,
    normalize_code,
    personality_compatibility,
)


# ---------------------------------------------------------------------------
# Personality
# ---------------------------------------------------------------------------
def personality_score(code_a: str | None, code_b: str | None) -> float:
    """Tabulated compatibility for the ordered pair; unknown codes → 0.5."""
    return personality_compatibility(code_a, code_b)


# ---------------------------------------------------------------------------
# Job level
# ---------------------------------------------------------------------------
# Ranked-position tiers
PEER_SCORE = 0.8
MENTOR_SCORE = 1.0
SAME_TRACK_SCORE = 0.6
CROSS_TRACK_SCORE = 0.7
DISTANT_LEVEL_SCORE = 0.4

# Legacy-role tiers
SAME_ROLE_SCORE = 0.6
COMPLEMENTARY_ROLE_SCORE = 1.0
RELATED_ROLE_SCORE = 0.5
DIFFERENT_ROLE_SCORE = 0.3


def job_level_score(level_a: str | None, level_b: str | None) -> float:
    """Score the working relationship implied by two job levels.

    Both ranked: peer 0.8, one rank apart (mentor/mentee) 1.0, same category
    0.6, parallel-track categories 0.7, otherwise 0.4. If either side is a
    legacy label: identical 0.6, complementary 1.0, same coarse category 0.5,
    otherwise 0.3.
    """
    a = resolve_job_level(level_a)
    b = resolve_job_level(level_b)
    if a is None or b is None:
        return NEUTRAL_SCORE

    if isinstance(a, Position) and isinstance(b, Position):
        diff = abs(a.rank - b.rank)
        if diff == 0:
            return PEER_SCORE
        if diff == 1:
            return MENTOR_SCORE
        if a.category == b.category:
            return SAME_TRACK_SCORE
        if frozenset({a.category, b.category}) in CROSS_TRACK_PAIRS:
            return CROSS_TRACK_SCORE
        return DISTANT_LEVEL_SCORE

    if a.label == b.label:
        return SAME_ROLE_SCORE
    if is_complementary(a.label, b.label):
        return COMPLEMENTARY_ROLE_SCORE
    if a.category is not None and a.category == b.category:
        return RELATED_ROLE_SCORE
    return DIFFERENT_ROLE_SCORE


def job_level_relationship(level_a: str | None, level_b: str | None) -> str:
    """Short label describing the relationship scored by :func:`job_level_score`."""
    a = resolve_job_level(level_a)
    b = resolve_job_level(level_b)
    if a is None or b is None:
        return "no job level data"
    if isinstance(a, Position) and isinstance(b, Position):
        diff = abs(a.rank - b.rank)
        if diff == 0:
            return "peers"
        if diff == 1:
            return "mentor / mentee"
        if a.category == b.category:
            return "same track"
        if frozenset({a.category, b.category}) in CROSS_TRACK_PAIRS:
            return "cross track"
        return "different level"
    if a.label == b.label:
        return "same role"
    if is_complementary(a.label, b.label):
        return "complementary roles"
    if a.category is not None and a.category == b.category:
        return "related roles"
    return "different roles"


# ---------------------------------------------------------------------------
# Organizational proximity
# ---------------------------------------------------------------------------
# (prefer_cross=True, prefer_cross=False)
_SAME_PATH = (0.3, 0.6)
_SAME_TOP_TWO = (0.5, 0.7)
_SAME_TOP = (0.8, 0.6)
_SYNERGY = (1.0, 1.0)
_UNRELATED = (0.4, 0.3)


def org_proximity_score(
    path_a: str | Sequence[str] | None,
    path_b: str | Sequence[str] | None,
    prefer_cross: bool = True,
) -> float:
    """Score two unit paths by how many leading levels they share.

    ``prefer_cross`` inverts the tier ordering so callers who want cross-unit
    connections rank distant colleagues above close ones.
    """
    a = parse_org_path(path_a)
    b = parse_org_path(path_b)
    if not a or not b:
        return NEUTRAL_SCORE

    tier = 0 if prefer_cross else 1
    if a == b:
        return _SAME_PATH[tier]
    if len(a) >= 2 and len(b) >= 2 and a[:2] == b[:2]:
        return _SAME_TOP_TWO[tier]
    if a[0] == b[0]:
        return _SAME_TOP[tier]
    if has_high_synergy(a[0], b[0]):
        return _SYNERGY[tier]
    return _UNRELATED[tier]


def org_relationship(path_a: str | Sequence[str] | None, path_b: str | Sequence[str] | None) -> str:
    a = parse_org_path(path_a)
    b = parse_org_path(path_b)
    if not a or not b:
        return "no unit data"
    if a == b:
        return "same team"
    if len(a) >= 2 and len(b) >= 2 and a[:2] == b[:2]:
        return "same division"
    if a[0] == b[0]:
        return "same organization"
    if has_high_synergy(a[0], b[0]):
        return "high-synergy units"
    return "different units"


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------
def location_score(loc_a: str | None, loc_b: str | None) -> float:
    """Physical proximity of two office locations."""
    a = normalize_location(loc_a)
    b = normalize_location(loc_b)
    if a is None or b is None:
        return NEUTRAL_SCORE
    if a == b:
        return 1.0
    if REMOTE in (a, b):
        return 0.5
    if OVERSEAS in (a, b):
        return 0.3
    if a in CAPITAL_AREA and b in CAPITAL_AREA:
        return 0.7
    if a in REGIONAL_METRO and b in REGIONAL_METRO:
        return 0.4
    if (a in CAPITAL_AREA and b in REGIONAL_METRO) or (a in REGIONAL_METRO and b in CAPITAL_AREA):
        return 0.4
    return 0.3


def location_relationship(loc_a: str | None, loc_b: str | None) -> str:
    a = normalize_location(loc_a)
    b = normalize_location(loc_b)
    if a is None or b is None:
        return "no location data"
    if a == b:
        return "same office"
    if REMOTE in (a, b):
        return "remote-compatible"
    if OVERSEAS in (a, b):
        return "overseas"
    if a in CAPITAL_AREA and b in CAPITAL_AREA:
        return "capital area"
    return "different cities"


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------
def tag_overlap(tags_a: Iterable[str], tags_b: Iterable[str]) -> float:
    """Jaccard similarity of two tag sets; 0 when both are empty."""
    set_a = set(tags_a)
    set_b = set(tags_b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def common_tags(tags_a: Sequence[str], tags_b: Iterable[str]) -> list[str]:
    """Shared tags in the order they appear in ``tags_a``."""
    other = set(tags_b)
    return [t for t in dict.fromkeys(tags_a) if t in other]


# ---------------------------------------------------------------------------
# Stated preferences
# ---------------------------------------------------------------------------
def preference_match(preferences: Preferences | None, candidate: Member) -> float:
    """Fraction of the caller's non-empty preference lists the candidate meets.

    A unit preference matches any level of the candidate's path. The
    personality list is only counted when the candidate has a personality.
    No preference lists at all → 0.5.
    """
    if preferences is None:
        return NEUTRAL_SCORE

    matched = 0
    criteria = 0

    if preferences.units:
        criteria += 1
        wanted = {u.strip() for u in preferences.units}
        if any(level in wanted for level in candidate.org_path):
            matched += 1

    if preferences.job_levels:
        criteria += 1
        wanted_levels = {resolve_job_level(lv) for lv in preferences.job_levels}
        if resolve_job_level(candidate.job_level) in wanted_levels - {None}:
            matched += 1

    if preferences.locations:
        criteria += 1
        wanted_locs = {normalize_location(loc) for loc in preferences.locations}
        loc = normalize_location(candidate.location)
        if loc is not None and loc in wanted_locs:
            matched += 1

    if preferences.personalities and candidate.personality:
        criteria += 1
        wanted_codes = {normalize_code(c) for c in preferences.personalities}
        if normalize_code(candidate.personality) in wanted_codes:
            matched += 1

    if criteria == 0:
        return NEUTRAL_SCORE
    return matched / criteria
