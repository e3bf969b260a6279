"""Tests for lib_affinity/personality_types.py: 16-type registry & compatibility table."""

import pytest

from lib_affinity.personality_types import (
    COMPATIBILITY_MATRIX,
    PERSONALITY_CODES,
    TEMPERAMENT_GROUPS,
    compatibility_label,
    get_personality_type,
    is_same_temperament,
    personality_compatibility,
    temperament_group,
)


class TestRegistry:
    def test_sixteen_codes(self):
        assert len(PERSONALITY_CODES) == 16
        assert len(set(PERSONALITY_CODES)) == 16

    def test_four_groups_of_four(self):
        assert set(TEMPERAMENT_GROUPS) == {"NT", "NF", "SJ", "SP"}
        for group in TEMPERAMENT_GROUPS.values():
            assert len(group.codes) == 4

    def test_every_code_in_exactly_one_group(self):
        seen = [code for g in TEMPERAMENT_GROUPS.values() for code in g.codes]
        assert sorted(seen) == sorted(PERSONALITY_CODES)

    def test_lookup_is_case_insensitive(self):
        ptype = get_personality_type(" intj ")
        assert ptype is not None
        assert ptype.code == "INTJ"
        assert ptype.temperament == "NT"

    def test_unknown_lookup(self):
        assert get_personality_type("ABCD") is None
        assert get_personality_type(None) is None

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            COMPATIBILITY_MATRIX["INTJ"] = {}  # type: ignore[index]


class TestCompatibility:
    def test_all_256_pairs_defined_and_bounded(self):
        for a in PERSONALITY_CODES:
            for b in PERSONALITY_CODES:
                value = personality_compatibility(a, b)
                assert 0.0 <= value <= 1.0
                assert b in COMPATIBILITY_MATRIX[a]

    def test_known_values(self):
        assert personality_compatibility("INTJ", "ENTP") == 1.0
        assert personality_compatibility("INFJ", "ENFP") == 1.0
        assert personality_compatibility("INTJ", "ESFJ") == 0.45

    def test_case_insensitive(self):
        assert personality_compatibility("intj", "entp") == personality_compatibility("INTJ", "ENTP")

    def test_unknown_code_is_neutral(self):
        """Unknown or missing codes on either side give exactly 0.5."""
        assert personality_compatibility("XXXX", "INTJ") == 0.5
        assert personality_compatibility("INTJ", "XXXX") == 0.5
        assert personality_compatibility(None, "INTJ") == 0.5
        assert personality_compatibility("", "") == 0.5


class TestTemperament:
    def test_group_of(self):
        assert temperament_group("enfp") == "NF"
        assert temperament_group("ISTJ") == "SJ"
        assert temperament_group("nope") is None

    def test_same_temperament(self):
        assert is_same_temperament("ISTP", "ESFP")
        assert not is_same_temperament("ISTP", "ISTJ")

    def test_unknown_never_same(self):
        assert not is_same_temperament(None, None)
        assert not is_same_temperament("XXXX", "XXXX")


class TestCompatibilityLabel:
    def test_tiers(self):
        assert compatibility_label("INTJ", "ENTP") == "very high compatibility"
        assert compatibility_label("INTJ", "INTP") == "high compatibility"
        assert compatibility_label("INTJ", "ISTJ") == "good compatibility"
        assert compatibility_label("INTJ", "ISFJ") == "average compatibility"
        assert compatibility_label("INTJ", "ESFJ") == "challenging compatibility"

    def test_missing_data(self):
        assert compatibility_label(None, "INTJ") == "no personality data"
