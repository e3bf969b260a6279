"""Office locations and their proximity groupings."""

from __future__ import annotations

from typing import Literal


REMOTE = "remote"
OVERSEAS = "overseas"

CAPITAL_AREA: frozenset[str] = frozenset({"seoul_hq", "seoul_gangnam", "seoul_pangyo"})
REGIONAL_METRO: frozenset[str] = frozenset({"busan", "daegu", "incheon", "gwangju", "daejeon"})

OFFICE_LOCATIONS: tuple[str, ...] = (
    *sorted(CAPITAL_AREA),
    *sorted(REGIONAL_METRO),
    "jeju",
    REMOTE,
    OVERSEAS,
    "other",
)

LocationGroup = Literal["capital_area", "regional_metro", "jeju", "overseas", "remote", "other"]


def normalize_location(location: str | None) -> str | None:
    if not location or not location.strip():
        return None
    return location.strip().lower().replace(" ", "_")


def location_group(location: str | None) -> LocationGroup:
    loc = normalize_location(location)
    if loc in CAPITAL_AREA:
        return "capital_area"
    if loc in REGIONAL_METRO:
        return "regional_metro"
    if loc == "jeju":
        return "jeju"
    if loc == OVERSEAS:
        return "overseas"
    if loc == REMOTE:
        return "remote"
    return "other"


def is_same_city_area(loc_a: str | None, loc_b: str | None) -> bool:
    a = normalize_location(loc_a)
    b = normalize_location(loc_b)
    if a is None or b is None:
        return False
    return a == b or (a in CAPITAL_AREA and b in CAPITAL_AREA)
