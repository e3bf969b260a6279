"""
Example: Driving the engine from AFFINITY_* environment variables

This example builds a small cohort, lays out the colleague network around one
member and splits the cohort into teams, taking every tunable default from the
environment.

Optional variables (defaults in brackets):
   AFFINITY_MIN_SIMILARITY=0.2
   AFFINITY_MAX_PER_CLUSTER=10
   AFFINITY_CANVAS_WIDTH=800
   AFFINITY_CANVAS_HEIGHT=600
   AFFINITY_LAYOUT_ITERATIONS=120
   AFFINITY_SWAP_ITERATIONS=100
   AFFINITY_DIAGNOSTICS=false
"""

import logging
import random

from lib_affinity import Member, build_graph, layout_graph, partition_teams, resolve_criteria
from lib_affinity.config import load_settings


settings = load_settings()

cohort = [
    Member(id="kim", org_path="CTO > Platform > Backend Team", job_level="manager",
           location="seoul_hq", personality="INTJ", tags=["running", "coffee_chat"]),
    Member(id="lee", org_path="CTO > Platform > Frontend Team", job_level="assistant_manager",
           location="seoul_pangyo", personality="ENFP", tags=["music", "running"]),
    Member(id="park", org_path="CSO > Strategy", job_level="general_manager",
           location="seoul_hq", personality="ESTJ", tags=["hiking"]),
    Member(id="choi", org_path="AX Center > Data", job_level="senior_researcher",
           location="busan", personality="INFP", tags=["reading", "music"]),
    Member(id="jung", org_path="Test Automation Lab > QA", job_level="staff",
           location="remote", personality="ISTP", tags=["gaming"]),
    Member(id="kang", org_path="CFO > Accounting", job_level="manager",
           location="seoul_gangnam", personality="ISFJ", tags=["cooking", "coffee_chat"]),
    Member(id="yoon", org_path="AX Center > Data", job_level="researcher",
           location="daejeon", personality="ENTP", tags=["reading"]),
    Member(id="lim", org_path="CTO > Security", job_level="associate",
           location="seoul_hq", personality="ESFP", tags=["travel", "music"]),
]

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if settings.diagnostics else logging.INFO)

    graph = build_graph(
        cohort[0],
        cohort[1:],
        min_similarity=settings.min_similarity,
        max_per_cluster=settings.max_per_cluster,
        canvas_size=(settings.canvas_width, settings.canvas_height),
    )
    graph = layout_graph(
        graph,
        canvas_size=(settings.canvas_width, settings.canvas_height),
        iterations=settings.layout_iterations,
    )
    print("=" * 50)
    print(f"Network for {cohort[0].id}: {graph.stats.total_nodes} nodes, {graph.stats.total_edges} edges")
    print("=" * 50)
    for node in graph.nodes:
        print(f"  {node.id:<6} {node.unit:<22} ({node.position.x:6.1f}, {node.position.y:6.1f})")

    criteria = resolve_criteria(["diverse_departments", "mixed_job_levels"], confidence=0.8)
    result = partition_teams(
        cohort,
        team_size=4,
        criteria=criteria,
        max_swap_iterations=settings.swap_iterations,
        rng=random.Random(42),
    )
    print("\n" + "=" * 50)
    print("Teams:")
    print("=" * 50)
    for team in result.teams:
        print(f"  {team.name}: {', '.join(team.member_ids)} (fit {team.average_fit:.2f}, "
              f"{team.diversity.unit_count} units)")
