"""Tests for lib_affinity/engine/subscores.py."""

import pytest

from lib_affinity.engine.subscores import (
    common_tags,
    job_level_relationship,
    job_level_score,
    location_score,
    org_proximity_score,
    org_relationship,
    personality_score,
    preference_match,
    tag_overlap,
)
from lib_affinity.member_models import Member, Preferences


class TestPersonalityScore:
    def test_table_value(self):
        assert personality_score("ENTP", "INTJ") == 1.0

    def test_missing_is_neutral(self):
        assert personality_score(None, "INTJ") == 0.5


class TestJobLevelScore:
    def test_peer(self):
        assert job_level_score("manager", "Manager") == 0.8

    def test_one_rank_apart_is_highest(self):
        assert job_level_score("manager", "assistant_manager") == 1.0

    def test_one_rank_apart_across_tracks(self):
        """general_manager (7) and senior_researcher (8) are still mentor/mentee."""
        assert job_level_score("general_manager", "senior_researcher") == 1.0

    def test_same_track(self):
        assert job_level_score("general_manager", "manager") == 0.6

    def test_cross_track(self):
        assert job_level_score("general_manager", "researcher") == 0.7

    def test_distant(self):
        assert job_level_score("president", "staff") == 0.4

    def test_legacy_same_role(self):
        assert job_level_score("backend_developer", "backend_developer") == 0.6

    def test_legacy_complementary(self):
        assert job_level_score("backend_developer", "frontend_developer") == 1.0

    def test_legacy_same_category(self):
        assert job_level_score("marketer", "hr_specialist") == 0.5

    def test_legacy_unrelated(self):
        assert job_level_score("marketer", "sre") == 0.3

    def test_mixed_schema_uses_legacy_rules(self):
        assert job_level_score("manager", "backend_developer") == 0.3

    def test_missing_is_neutral(self):
        assert job_level_score(None, "manager") == 0.5
        assert job_level_score("", "") == 0.5

    def test_relationship_labels(self):
        assert job_level_relationship("manager", "assistant_manager") == "mentor / mentee"
        assert job_level_relationship("manager", "manager") == "peers"
        assert job_level_relationship("backend_developer", "frontend_developer") == "complementary roles"


class TestOrgProximityScore:
    def test_same_full_path(self):
        path = ["CTO", "Platform", "Backend Team"]
        assert org_proximity_score(path, path, prefer_cross=True) == 0.3
        assert org_proximity_score(path, path, prefer_cross=False) == 0.6

    def test_same_top_two(self):
        a = ["CTO", "Platform", "Backend Team"]
        b = ["CTO", "Platform", "Frontend Team"]
        assert org_proximity_score(a, b, prefer_cross=True) == 0.5
        assert org_proximity_score(a, b, prefer_cross=False) == 0.7

    def test_same_top_only(self):
        a = ["CTO", "Platform"]
        b = ["CTO", "Security"]
        assert org_proximity_score(a, b, prefer_cross=True) == 0.8
        assert org_proximity_score(a, b, prefer_cross=False) == 0.6

    def test_synergy(self):
        assert org_proximity_score(["CTO"], ["CSO"], prefer_cross=True) == 1.0
        assert org_proximity_score(["CTO"], ["CSO"], prefer_cross=False) == 1.0

    def test_unrelated(self):
        assert org_proximity_score(["CTO"], ["Outsourcing"], prefer_cross=True) == 0.4
        assert org_proximity_score(["CTO"], ["Outsourcing"], prefer_cross=False) == 0.3

    def test_accepts_path_strings(self):
        assert org_proximity_score("CTO > Platform", ["CTO", "Platform"]) == 0.3

    def test_missing_is_neutral(self):
        assert org_proximity_score([], ["CTO"]) == 0.5
        assert org_proximity_score(None, None) == 0.5

    def test_relationship_labels(self):
        assert org_relationship(["CTO", "A"], ["CTO", "A"]) == "same team"
        assert org_relationship(["CTO"], ["CSO"]) == "high-synergy units"


class TestLocationScore:
    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("seoul_hq", "seoul_hq", 1.0),
            ("Seoul HQ", "seoul_hq", 1.0),
            ("remote", "busan", 0.5),
            ("remote", "overseas", 0.5),
            ("overseas", "busan", 0.3),
            ("seoul_hq", "seoul_pangyo", 0.7),
            ("busan", "daegu", 0.4),
            ("seoul_hq", "busan", 0.4),
            ("jeju", "busan", 0.3),
            (None, "busan", 0.5),
        ],
    )
    def test_tiers(self, a, b, expected):
        assert location_score(a, b) == expected


class TestTags:
    def test_jaccard(self):
        assert tag_overlap(["a", "b"], ["b", "c"]) == pytest.approx(1 / 3)

    def test_symmetric(self):
        a, b = ["running", "coffee_chat", "music"], ["music", "hiking"]
        assert tag_overlap(a, b) == tag_overlap(b, a)

    def test_both_empty_is_zero(self):
        assert tag_overlap([], []) == 0.0

    def test_identical(self):
        assert tag_overlap(["x", "y"], ["y", "x"]) == 1.0

    def test_common_tags_keep_first_order(self):
        assert common_tags(["c", "a", "b"], ["b", "c"]) == ["c", "b"]


class TestPreferenceMatch:
    candidate = Member(
        id="c1",
        org_path="CTO > Platform > Backend Team",
        job_level="manager",
        location="seoul_gangnam",
    )

    def test_no_preferences_is_neutral(self):
        assert preference_match(None, self.candidate) == 0.5
        assert preference_match(Preferences(), self.candidate) == 0.5

    def test_unit_matches_any_level(self):
        prefs = Preferences(units=["Backend Team"])
        assert preference_match(prefs, self.candidate) == 1.0

    def test_partial_match(self):
        prefs = Preferences(units=["Backend Team"], locations=["Seoul HQ"])
        assert preference_match(prefs, self.candidate) == 0.5

    def test_job_levels_are_resolved(self):
        prefs = Preferences(job_levels=["Manager"])
        assert preference_match(prefs, self.candidate) == 1.0

    def test_personality_skipped_without_data(self):
        """Candidate has no personality, so that list does not count."""
        prefs = Preferences(personalities=["ENTP"])
        assert preference_match(prefs, self.candidate) == 0.5
