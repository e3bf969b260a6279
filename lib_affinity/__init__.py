"""Colleague affinity scoring, network graph layout and team partitioning."""

from .engine.affinity import explain_match, recommend, score_affinity
from .engine.clustering import build_graph
from .engine.layout import LayoutConfig, fit_layout_to_canvas, layout, layout_graph
from .engine.team_partition import partition_teams
from .errors import AffinityError, InvalidTeamSizeError, InvalidWeightsError
from .member_models import DEFAULT_WEIGHTS, AffinityScore, Member, Preferences, SubScoreWeights
from .team_models import GroupingCriteria, PartitionResult, Team, resolve_criteria

__all__ = [
    "AffinityError",
    "AffinityScore",
    "DEFAULT_WEIGHTS",
    "GroupingCriteria",
    "InvalidTeamSizeError",
    "InvalidWeightsError",
    "LayoutConfig",
    "Member",
    "PartitionResult",
    "Preferences",
    "SubScoreWeights",
    "Team",
    "build_graph",
    "explain_match",
    "fit_layout_to_canvas",
    "layout",
    "layout_graph",
    "partition_teams",
    "recommend",
    "resolve_criteria",
    "score_affinity",
]
