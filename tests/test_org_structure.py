"""Tests for lib_affinity/org_structure.py and lib_affinity/locations.py."""

from lib_affinity.locations import (
    OFFICE_LOCATIONS,
    is_same_city_area,
    location_group,
    normalize_location,
)
from lib_affinity.org_structure import (
    CLUSTER_COLORS,
    DEFAULT_CLUSTER_COLOR,
    SYNERGY_MAP,
    TOP_LEVEL_UNITS,
    cluster_color,
    format_org_path,
    has_high_synergy,
    parse_org_path,
    top_level_unit,
)


class TestOrgPath:
    def test_parse_string(self):
        assert parse_org_path("CTO > Platform >  Backend Team") == ("CTO", "Platform", "Backend Team")

    def test_parse_sequence_drops_blanks(self):
        assert parse_org_path(["CTO", "", "  ", "Platform"]) == ("CTO", "Platform")

    def test_parse_missing(self):
        assert parse_org_path(None) == ()
        assert parse_org_path("") == ()

    def test_format_round_trip(self):
        assert format_org_path(("CTO", "Platform")) == "CTO > Platform"

    def test_top_level_unit(self):
        assert top_level_unit("AX Center > Data") == "AX Center"
        assert top_level_unit(None) is None


class TestSynergy:
    def test_listed_pair(self):
        assert has_high_synergy("CTO", "CSO")

    def test_bidirectional(self):
        """Qingdao Sure lists CFO; the lookup also works the other way round."""
        assert has_high_synergy("Qingdao Sure", "CFO")
        assert has_high_synergy("CFO", "Qingdao Sure")

    def test_same_unit_is_not_synergy(self):
        assert not has_high_synergy("CTO", "CTO")

    def test_unlisted_or_missing(self):
        assert not has_high_synergy("CTO", "Outsourcing")
        assert not has_high_synergy(None, "CTO")

    def test_map_covers_known_units_only(self):
        for unit, partners in SYNERGY_MAP.items():
            assert unit in TOP_LEVEL_UNITS
            assert partners <= set(TOP_LEVEL_UNITS)


class TestClusterColor:
    def test_known_unit(self):
        assert cluster_color("CTO") == "#F97316"

    def test_fallback(self):
        assert cluster_color("Somewhere Else") == DEFAULT_CLUSTER_COLOR
        assert cluster_color(None) == DEFAULT_CLUSTER_COLOR

    def test_every_top_level_unit_has_own_color(self):
        assert set(CLUSTER_COLORS) == set(TOP_LEVEL_UNITS)
        colors = [cluster_color(unit) for unit in TOP_LEVEL_UNITS]
        assert DEFAULT_CLUSTER_COLOR not in colors
        assert len(set(colors)) == len(colors)


class TestLocations:
    def test_normalize(self):
        assert normalize_location(" Seoul HQ ") == "seoul_hq"
        assert normalize_location("") is None

    def test_groups(self):
        assert location_group("seoul_pangyo") == "capital_area"
        assert location_group("Busan") == "regional_metro"
        assert location_group("remote") == "remote"
        assert location_group("mars") == "other"

    def test_office_locations_are_normalized_and_grouped(self):
        for loc in OFFICE_LOCATIONS:
            assert normalize_location(loc) == loc
        others = [loc for loc in OFFICE_LOCATIONS if location_group(loc) == "other"]
        assert others == ["other"]

    def test_same_city_area(self):
        assert is_same_city_area("seoul_hq", "seoul_gangnam")
        assert not is_same_city_area("seoul_hq", "busan")
        assert not is_same_city_area(None, "busan")
