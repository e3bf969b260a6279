"""Personality type registry and pairwise compatibility table.

Defines the 16 four-letter personality codes, their four temperament groups
(NT / NF / SJ / SP) and a hand-tuned 16×16 compatibility table.

Compatibility tiers used when the table was tuned:
    1.00  ideal (shared cognitive functions, complementary)
    0.85  same temperament group
    0.70  complementary types
    0.55  neutral
    0.40  challenging (opposite on most axes)

The table is keyed by *ordered* pair and is not perfectly symmetric.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Literal, Mapping

from pydantic import BaseModel, Field


NEUTRAL_SCORE = 0.5

Temperament = Literal["NT", "NF", "SJ", "SP"]


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class TemperamentGroup(BaseModel):
    """One of four coarse personality families."""

    id: Temperament
    name: str = Field(..., min_length=1)
    codes: tuple[str, ...] = Field(..., min_length=4, max_length=4)


class PersonalityType(BaseModel):
    """A single four-letter personality code."""

    code: str = Field(..., min_length=4, max_length=4)
    temperament: Temperament


# ---------------------------------------------------------------------------
# Temperament groups
# ---------------------------------------------------------------------------
TEMPERAMENT_GROUPS: Mapping[str, TemperamentGroup] = MappingProxyType({
    "NT": TemperamentGroup(id="NT", name="Analysts", codes=("INTJ", "INTP", "ENTJ", "ENTP")),
    "NF": TemperamentGroup(id="NF", name="Diplomats", codes=("INFJ", "INFP", "ENFJ", "ENFP")),
    "SJ": TemperamentGroup(id="SJ", name="Sentinels", codes=("ISTJ", "ISFJ", "ESTJ", "ESFJ")),
    "SP": TemperamentGroup(id="SP", name="Explorers", codes=("ISTP", "ISFP", "ESTP", "ESFP")),
})

PERSONALITY_TYPES: Mapping[str, PersonalityType] = MappingProxyType({
    code: PersonalityType(code=code, temperament=group.id)
    for group in TEMPERAMENT_GROUPS.values()
    for code in group.codes
})

PERSONALITY_CODES: tuple[str, ...] = tuple(PERSONALITY_TYPES)


# ---------------------------------------------------------------------------
# Compatibility table (row = first member, column = second member)
# ---------------------------------------------------------------------------
_COLUMNS = (
    "INTJ", "INTP", "ENTJ", "ENTP",
    "INFJ", "INFP", "ENFJ", "ENFP",
    "ISTJ", "ISFJ", "ESTJ", "ESFJ",
    "ISTP", "ISFP", "ESTP", "ESFP",
)

_ROWS: dict[str, tuple[float, ...]] = {
    # Ni Te Fi Se
    "INTJ": (0.80, 0.85, 0.90, 1.00, 0.75, 0.70, 0.65, 0.85, 0.60, 0.50, 0.55, 0.45, 0.65, 0.55, 0.60, 0.50),
    # Ti Ne Si Fe
    "INTP": (0.85, 0.75, 0.90, 0.85, 0.80, 0.70, 0.75, 0.80, 0.60, 0.50, 0.55, 0.55, 0.70, 0.55, 0.65, 0.50),
    # Te Ni Se Fi
    "ENTJ": (0.90, 0.90, 0.80, 0.85, 0.75, 0.80, 0.70, 0.75, 0.65, 0.55, 0.70, 0.55, 0.75, 0.60, 0.70, 0.55),
    # Ne Ti Fe Si
    "ENTP": (1.00, 0.85, 0.85, 0.75, 0.95, 0.80, 0.80, 0.75, 0.55, 0.50, 0.60, 0.55, 0.70, 0.55, 0.65, 0.55),
    # Ni Fe Ti Se
    "INFJ": (0.75, 0.80, 0.75, 0.95, 0.80, 0.85, 0.85, 1.00, 0.55, 0.60, 0.50, 0.60, 0.60, 0.65, 0.55, 0.55),
    # Fi Ne Si Te
    "INFP": (0.70, 0.70, 0.80, 0.80, 0.85, 0.75, 0.90, 0.85, 0.55, 0.60, 0.55, 0.60, 0.55, 0.70, 0.50, 0.60),
    # Fe Ni Se Ti
    "ENFJ": (0.65, 0.75, 0.70, 0.80, 0.85, 0.90, 0.80, 0.85, 0.55, 0.65, 0.55, 0.70, 0.60, 0.75, 0.60, 0.70),
    # Ne Fi Te Si
    "ENFP": (0.85, 0.80, 0.75, 0.75, 1.00, 0.85, 0.85, 0.75, 0.55, 0.55, 0.55, 0.60, 0.60, 0.70, 0.60, 0.65),
    # Si Te Fi Ne
    "ISTJ": (0.60, 0.60, 0.65, 0.55, 0.55, 0.55, 0.55, 0.55, 0.80, 0.85, 0.90, 0.85, 0.75, 0.70, 0.80, 0.70),
    # Si Fe Ti Ne
    "ISFJ": (0.50, 0.50, 0.55, 0.50, 0.60, 0.60, 0.65, 0.55, 0.85, 0.80, 0.85, 0.90, 0.70, 0.80, 0.75, 0.85),
    # Te Si Ne Fi
    "ESTJ": (0.55, 0.55, 0.70, 0.60, 0.50, 0.55, 0.55, 0.55, 0.90, 0.85, 0.80, 0.85, 0.80, 0.70, 0.85, 0.75),
    # Fe Si Ne Ti
    "ESFJ": (0.45, 0.55, 0.55, 0.55, 0.60, 0.60, 0.70, 0.60, 0.85, 0.90, 0.85, 0.80, 0.70, 0.85, 0.80, 0.90),
    # Ti Se Ni Fe
    "ISTP": (0.65, 0.70, 0.75, 0.70, 0.60, 0.55, 0.60, 0.60, 0.75, 0.70, 0.80, 0.70, 0.80, 0.85, 0.90, 0.85),
    # Fi Se Ni Te
    "ISFP": (0.55, 0.55, 0.60, 0.55, 0.65, 0.70, 0.75, 0.70, 0.70, 0.80, 0.70, 0.85, 0.85, 0.80, 0.90, 0.90),
    # Se Ti Fe Ni
    "ESTP": (0.60, 0.65, 0.70, 0.65, 0.55, 0.50, 0.60, 0.60, 0.80, 0.75, 0.85, 0.80, 0.90, 0.90, 0.80, 0.90),
    # Se Fi Te Ni
    "ESFP": (0.50, 0.50, 0.55, 0.55, 0.55, 0.60, 0.70, 0.65, 0.70, 0.85, 0.75, 0.90, 0.85, 0.90, 0.90, 0.80),
}

COMPATIBILITY_MATRIX: Mapping[str, Mapping[str, float]] = MappingProxyType({
    row: MappingProxyType(dict(zip(_COLUMNS, values)))
    for row, values in _ROWS.items()
})


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------
def normalize_code(code: str | None) -> str | None:
    """Upper-case and strip a personality code; empty input becomes ``None``."""
    if not code:
        return None
    normalized = code.strip().upper()
    return normalized or None


def get_personality_type(code: str | None) -> PersonalityType | None:
    """Look up a personality type by (case-insensitive) code."""
    normalized = normalize_code(code)
    return PERSONALITY_TYPES.get(normalized) if normalized else None


def personality_compatibility(code_a: str | None, code_b: str | None) -> float:
    """Return the tabulated compatibility for the ordered pair (a, b).

    Missing or unknown codes on either side yield the neutral 0.5.
    """
    a = normalize_code(code_a)
    b = normalize_code(code_b)
    if a is None or b is None:
        return NEUTRAL_SCORE
    row = COMPATIBILITY_MATRIX.get(a)
    if row is None:
        return NEUTRAL_SCORE
    return row.get(b, NEUTRAL_SCORE)


def temperament_group(code: str | None) -> Temperament | None:
    ptype = get_personality_type(code)
    return ptype.temperament if ptype else None


def is_same_temperament(code_a: str | None, code_b: str | None) -> bool:
    """True when both codes are known and share a temperament group."""
    group_a = temperament_group(code_a)
    return group_a is not None and group_a == temperament_group(code_b)


def compatibility_label(code_a: str | None, code_b: str | None) -> str:
    """Human-readable tier for the pair's compatibility."""
    if not normalize_code(code_a) or not normalize_code(code_b):
        return "no personality data"
    score = personality_compatibility(code_a, code_b)
    if score >= 0.90:
        return "very high compatibility"
    if score >= 0.75:
        return "high compatibility"
    if score >= 0.60:
        return "good compatibility"
    if score >= 0.50:
        return "average compatibility"
    return "challenging compatibility"
