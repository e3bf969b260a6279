"""Job level reference data and the dual ranked / legacy resolution.

Current profiles carry a *ranked position* (e.g. ``"manager"``) drawn from five
categories; older profiles carry a free-text *legacy role* (e.g.
``"backend_developer"``). A raw label resolves once into a tagged union,
``Position | LegacyRole``, and scoring dispatches on the variant.

Lower rank numbers are more senior. Management and research tracks share ranks
7–10; overseas titles map onto the executive / management bands.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping, Union


PositionCategory = Literal["executive", "management", "research", "general", "overseas"]


# ---------------------------------------------------------------------------
# Ranked positions
# ---------------------------------------------------------------------------
POSITION_CATEGORIES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "executive": (
        "president",
        "vice_president",
        "senior_managing_director",
        "managing_director",
        "director",
        "executive_fellow",
    ),
    "management": ("general_manager", "deputy_general_manager", "manager", "assistant_manager"),
    "research": ("principal_researcher", "senior_researcher", "researcher", "associate_researcher"),
    "general": ("staff", "associate", "intern"),
    "overseas": ("overseas_general_manager", "overseas_director", "overseas_deputy_director", "office_head"),
})

POSITION_RANKS: Mapping[str, int] = MappingProxyType({
    "president": 1,
    "vice_president": 2,
    "senior_managing_director": 3,
    "managing_director": 4,
    "director": 5,
    "executive_fellow": 6,
    "general_manager": 7,
    "deputy_general_manager": 8,
    "manager": 9,
    "assistant_manager": 10,
    "principal_researcher": 7,
    "senior_researcher": 8,
    "researcher": 9,
    "associate_researcher": 10,
    "staff": 11,
    "associate": 11,
    "intern": 13,
    "overseas_general_manager": 5,
    "overseas_director": 7,
    "overseas_deputy_director": 8,
    "office_head": 7,
})

# Category pairs running in parallel rank bands.
CROSS_TRACK_PAIRS: frozenset[frozenset[str]] = frozenset({
    frozenset({"management", "research"}),
    frozenset({"management", "overseas"}),
    frozenset({"research", "overseas"}),
})


# ---------------------------------------------------------------------------
# Legacy free-text roles
# ---------------------------------------------------------------------------
LEGACY_ROLE_CATEGORIES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "development": ("backend_developer", "frontend_developer", "fullstack_developer", "mobile_developer"),
    "data": ("data_engineer", "data_scientist", "ml_engineer"),
    "infrastructure": ("devops_engineer", "sre", "security_engineer"),
    "design": ("ux_designer", "ui_designer", "graphic_designer"),
    "product": ("product_manager", "project_manager"),
    "business": ("marketer", "sales_representative", "hr_specialist", "finance_specialist"),
    "quality": ("qa_engineer",),
})

COMPLEMENTARY_ROLES: Mapping[str, frozenset[str]] = MappingProxyType({
    "backend_developer": frozenset({"frontend_developer", "devops_engineer", "data_engineer", "mobile_developer"}),
    "frontend_developer": frozenset({"backend_developer", "ux_designer", "ui_designer", "mobile_developer"}),
    "fullstack_developer": frozenset({"ux_designer", "devops_engineer", "product_manager"}),
    "mobile_developer": frozenset({"backend_developer", "ui_designer", "ux_designer"}),
    "data_engineer": frozenset({"data_scientist", "backend_developer", "ml_engineer"}),
    "data_scientist": frozenset({"data_engineer", "ml_engineer", "product_manager"}),
    "ml_engineer": frozenset({"data_scientist", "backend_developer", "devops_engineer"}),
    "devops_engineer": frozenset({"backend_developer", "sre", "security_engineer"}),
    "sre": frozenset({"devops_engineer", "backend_developer", "security_engineer"}),
    "security_engineer": frozenset({"devops_engineer", "sre", "backend_developer"}),
    "qa_engineer": frozenset({"backend_developer", "frontend_developer", "product_manager"}),
    "ux_designer": frozenset({"frontend_developer", "product_manager", "ui_designer"}),
    "ui_designer": frozenset({"frontend_developer", "ux_designer", "graphic_designer"}),
    "graphic_designer": frozenset({"ui_designer", "marketer"}),
    "product_manager": frozenset({"ux_designer", "backend_developer", "frontend_developer", "data_scientist"}),
    "project_manager": frozenset({"product_manager", "backend_developer", "frontend_developer"}),
    "marketer": frozenset({"graphic_designer", "data_scientist", "product_manager"}),
    "sales_representative": frozenset({"marketer", "product_manager"}),
    "hr_specialist": frozenset({"project_manager"}),
    "finance_specialist": frozenset({"project_manager"}),
})


# ---------------------------------------------------------------------------
# Tagged union
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Position:
    """A ranked position from the current job-level schema."""

    label: str
    rank: int
    category: PositionCategory


@dataclass(frozen=True)
class LegacyRole:
    """An unranked role label from the legacy schema (category may be unknown)."""

    label: str
    category: str | None


JobLevel = Union[Position, LegacyRole]


def _normalize(label: str) -> str:
    return label.strip().lower().replace(" ", "_").replace("-", "_")


def _position_category(label: str) -> PositionCategory | None:
    for category, labels in POSITION_CATEGORIES.items():
        if label in labels:
            return category  # type: ignore[return-value]
    return None


def _legacy_category(label: str) -> str | None:
    for category, labels in LEGACY_ROLE_CATEGORIES.items():
        if label in labels:
            return category
    return None


def resolve_job_level(label: str | None) -> JobLevel | None:
    """Resolve a raw label once into ``Position`` or ``LegacyRole``.

    Returns ``None`` for missing / blank input. Anything that is not a known
    ranked position is treated as a legacy label.
    """
    if not label or not label.strip():
        return None
    key = _normalize(label)
    category = _position_category(key)
    if category is not None:
        return Position(label=key, rank=POSITION_RANKS[key], category=category)
    return LegacyRole(label=key, category=_legacy_category(key))


def is_complementary(role_a: str, role_b: str) -> bool:
    """Bidirectional lookup in the complementary-pairs table."""
    return (
        role_b in COMPLEMENTARY_ROLES.get(role_a, frozenset())
        or role_a in COMPLEMENTARY_ROLES.get(role_b, frozenset())
    )


def rank_difference(a: JobLevel | None, b: JobLevel | None) -> int | None:
    """Absolute rank gap when both sides are ranked positions, else ``None``."""
    if isinstance(a, Position) and isinstance(b, Position):
        return abs(a.rank - b.rank)
    return None
