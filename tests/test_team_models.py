"""Tests for lib_affinity/team_models.py: criteria validation & resolution."""

import pytest
from pydantic import ValidationError

from lib_affinity.team_models import GroupingCriteria, Team, resolve_criteria


class TestGroupingCriteria:
    def test_defaults_inactive(self):
        c = GroupingCriteria()
        assert c.active == []
        assert not c.any_diverse
        assert c.confidence == 1.0

    def test_contradictory_pair_rejected(self):
        with pytest.raises(ValidationError, match="diverse_departments"):
            GroupingCriteria(diverse_departments=True, similar_departments=True)

    def test_independent_dimensions_combine(self):
        c = GroupingCriteria(diverse_departments=True, same_location=True, mixed_job_levels=True)
        assert c.active == ["diverse_departments", "same_location", "mixed_job_levels"]
        assert c.any_diverse

    def test_confidence_bounds(self):
        with pytest.raises(ValidationError):
            GroupingCriteria(confidence=1.5)


class TestResolveCriteria:
    def test_last_assertion_wins(self):
        c = resolve_criteria(["diverse_departments", "similar_departments"])
        assert c.similar_departments
        assert not c.diverse_departments

    def test_order_reversed(self):
        c = resolve_criteria(["same_location", "mixed_locations", "similar_personality"])
        assert c.mixed_locations
        assert not c.same_location
        assert c.similar_personality

    def test_confidence_and_rules_carried(self):
        c = resolve_criteria(["mixed_job_levels"], confidence=0.65, custom_rules=["no more than 2 interns"])
        assert c.confidence == 0.65
        assert c.custom_rules == ["no more than 2 interns"]

    def test_unknown_flag(self):
        with pytest.raises(ValueError, match="Unknown grouping criterion"):
            resolve_criteria(["random"])

    def test_empty(self):
        assert resolve_criteria([]) == GroupingCriteria()


class TestTeam:
    def test_index_starts_at_one(self):
        with pytest.raises(ValidationError):
            Team(team_index=0, name="Team 0")

    def test_size(self):
        assert Team(team_index=1, name="Team 1", member_ids=["a", "b"]).size == 2
