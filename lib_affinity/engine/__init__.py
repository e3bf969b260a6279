"""Affinity, graph, layout and team-partitioning engine.

Sub-modules:
- subscores      – bounded per-dimension scores (personality, job level, org, location, tags, preferences)
- affinity       – weighted affinity score, explanations, recommendations
- clustering     – clustered network graph construction
- layout         – force-directed layout simulator
- team_partition – greedy + swap-search team partitioning
"""
