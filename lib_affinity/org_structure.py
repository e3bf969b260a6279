"""Organizational-unit paths, the top-level synergy map and cluster colours.

A unit path is an ordered sequence of levels, most general first:
``("Test Automation Lab", "Cloud Division", "Backend Team")``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping


PATH_SEPARATOR = ">"

TOP_LEVEL_UNITS: tuple[str, ...] = (
    "Test Automation Lab",
    "Embedded Tech Lab",
    "Smart Mobility Center",
    "AX Center",
    "E-Mobility Center",
    "Business Development HQ",
    "CSO",
    "CTO",
    "CFO",
    "Quality Assurance",
    "New Recruits",
    "Qingdao Sure",
    "Outsourcing",
)

# Top-level units considered highly complementary. Lookups are bidirectional.
SYNERGY_MAP: Mapping[str, frozenset[str]] = MappingProxyType({
    "Test Automation Lab": frozenset({"Embedded Tech Lab", "E-Mobility Center", "AX Center"}),
    "Embedded Tech Lab": frozenset({"Test Automation Lab", "Smart Mobility Center", "E-Mobility Center"}),
    "Smart Mobility Center": frozenset({"Embedded Tech Lab", "E-Mobility Center", "Business Development HQ"}),
    "AX Center": frozenset({"Test Automation Lab", "Business Development HQ", "E-Mobility Center"}),
    "E-Mobility Center": frozenset({"Test Automation Lab", "Embedded Tech Lab", "Smart Mobility Center"}),
    "Business Development HQ": frozenset({"Smart Mobility Center", "AX Center", "E-Mobility Center"}),
    "CSO": frozenset({"CFO", "CTO", "Business Development HQ"}),
    "CTO": frozenset({"Test Automation Lab", "Embedded Tech Lab", "CSO"}),
    "CFO": frozenset({"CSO", "Business Development HQ", "Qingdao Sure"}),
    "Qingdao Sure": frozenset({"CFO", "Business Development HQ"}),
})

CLUSTER_COLORS: Mapping[str, str] = MappingProxyType({
    "Test Automation Lab": "#3B82F6",
    "Embedded Tech Lab": "#EC4899",
    "Smart Mobility Center": "#8B5CF6",
    "AX Center": "#F59E0B",
    "E-Mobility Center": "#10B981",
    "Business Development HQ": "#06B6D4",
    "CSO": "#84CC16",
    "CTO": "#F97316",
    "CFO": "#14B8A6",
    "Quality Assurance": "#6366F1",
    "New Recruits": "#A855F7",
    "Qingdao Sure": "#EF4444",
    "Outsourcing": "#64748B",
})
DEFAULT_CLUSTER_COLOR = "#9CA3AF"


def parse_org_path(value: str | Iterable[str] | None) -> tuple[str, ...]:
    """Normalise a unit path given as ``"A > B > C"`` or a sequence of levels.

    Blank levels are dropped; missing input yields an empty path.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        parts: Iterable[str] = value.split(PATH_SEPARATOR)
    else:
        parts = value
    return tuple(p.strip() for p in parts if p and p.strip())


def format_org_path(path: Iterable[str]) -> str:
    return f" {PATH_SEPARATOR} ".join(path)


def top_level_unit(path: str | Iterable[str] | None) -> str | None:
    levels = parse_org_path(path)
    return levels[0] if levels else None


def has_high_synergy(unit_a: str | None, unit_b: str | None) -> bool:
    """True when two *different* top-level units appear in the synergy map."""
    if not unit_a or not unit_b or unit_a == unit_b:
        return False
    return (
        unit_b in SYNERGY_MAP.get(unit_a, frozenset())
        or unit_a in SYNERGY_MAP.get(unit_b, frozenset())
    )


def cluster_color(unit: str | None) -> str:
    if unit is None:
        return DEFAULT_CLUSTER_COLOR
    return CLUSTER_COLORS.get(unit, DEFAULT_CLUSTER_COLOR)
