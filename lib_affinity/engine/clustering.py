"""Clustered network graph construction.

Groups members by top-level organizational unit, scores the pairs that may
become edges, classifies and filters them, and seeds node positions for the
layout simulator. All functions are *pure*.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping, Sequence

from lib_affinity.engine.affinity import score_affinity, validate_weights
from lib_affinity.engine.subscores import common_tags
from lib_affinity.errors import AffinityError
from lib_affinity.graph_models import (
    CanvasSize,
    ClusterDefinition,
    ConnectionType,
    GraphEdge,
    GraphNode,
    GraphStats,
    NetworkGraph,
    Point,
    StrengthTier,
)
from lib_affinity.member_models import AffinityScore, Member, SubScoreWeights
from lib_affinity.org_structure import cluster_color, has_high_synergy

logger = logging.getLogger(__name__)

UNASSIGNED_UNIT = "Unassigned"

STRONG_THRESHOLD = 0.6
MODERATE_THRESHOLD = 0.4
PERSONALITY_COMPATIBLE_THRESHOLD = 0.75
# Non-self pairs need this multiple of the caller's threshold.
PEER_THRESHOLD_FACTOR = 1.5

RING_RADIUS_FACTOR = 0.4
MEMBER_RING_FACTOR = 0.8
CLUSTER_RADIUS_CAP = 0.25


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------
def unit_of(member: Member) -> str:
    return member.top_unit or UNASSIGNED_UNIT


def strength_tier(similarity: float) -> StrengthTier:
    if similarity >= STRONG_THRESHOLD:
        return "strong"
    if similarity >= MODERATE_THRESHOLD:
        return "moderate"
    return "weak"


def connection_type(a: Member, b: Member) -> ConnectionType:
    return "same_unit" if unit_of(a) == unit_of(b) else "cross_unit"


def make_edge(a: Member, b: Member, score: AffinityScore) -> GraphEdge:
    """Annotate an affinity score with the structural facts about the pair."""
    return GraphEdge(
        id=f"edge-{a.id}-{b.id}",
        source=a.id,
        target=b.id,
        similarity=score.total,
        common_tags=common_tags(a.tags, b.tags),
        connection_type=connection_type(a, b),
        strength=strength_tier(score.total),
        personality_compatible=score.personality >= PERSONALITY_COMPATIBLE_THRESHOLD,
    )


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------
def group_by_unit(members: Sequence[Member], max_per_cluster: int | None = None) -> dict[str, list[Member]]:
    """Bucket members by top-level unit, keeping input order within and across buckets.

    When ``max_per_cluster`` is given each bucket is truncated to its first
    ``max_per_cluster`` members.
    """
    groups: dict[str, list[Member]] = {}
    for m in members:
        groups.setdefault(unit_of(m), []).append(m)
    if max_per_cluster is not None:
        groups = {unit: bucket[:max_per_cluster] for unit, bucket in groups.items()}
    return groups


def _dedupe(self_member: Member, others: Sequence[Member]) -> list[Member]:
    seen = {self_member.id}
    result: list[Member] = []
    for m in others:
        if m.id in seen:
            logger.warning("Dropping duplicate member id %s from graph input", m.id)
            continue
        seen.add(m.id)
        result.append(m)
    return result


# ---------------------------------------------------------------------------
# Seed placement
# ---------------------------------------------------------------------------
def cluster_centers(count: int, canvas: CanvasSize) -> tuple[list[Point], float]:
    """Evenly spaced cluster centres on a ring, plus the per-cluster radius."""
    cx, cy = canvas.width / 2, canvas.height / 2
    ring = min(canvas.width, canvas.height) * RING_RADIUS_FACTOR
    if count <= 0:
        return [], 0.0
    if count == 1:
        return [Point(x=cx, y=cy)], ring * 0.5

    # At most half the chord between neighbours; capped so member rings stay on the canvas.
    radius = ring * min(CLUSTER_RADIUS_CAP, math.sin(math.pi / count))
    centers = []
    for i in range(count):
        angle = 2 * math.pi * i / count - math.pi / 2
        centers.append(Point(x=cx + ring * math.cos(angle), y=cy + ring * math.sin(angle)))
    return centers, radius


def seed_positions(members: Sequence[Member], center: Point, radius: float, self_id: str) -> dict[str, Point]:
    """Self at the centre, everyone else evenly spaced on an inner ring."""
    positions: dict[str, Point] = {}
    ring_members = [m for m in members if m.id != self_id]
    if len(members) == 1:
        return {members[0].id: center}
    if len(ring_members) < len(members):
        positions[self_id] = center

    inner = radius * MEMBER_RING_FACTOR
    step = 2 * math.pi / max(len(ring_members), 1)
    for i, m in enumerate(ring_members):
        angle = step * i - math.pi / 2
        positions[m.id] = Point(x=center.x + inner * math.cos(angle), y=center.y + inner * math.sin(angle))
    return positions


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def build_graph(
    self_member: Member,
    other_members: Sequence[Member],
    min_similarity: float = 0.2,
    max_per_cluster: int = 10,
    canvas_size: CanvasSize | tuple[float, float] | None = None,
    weights: SubScoreWeights | Mapping[str, float] | None = None,
) -> NetworkGraph:
    """Build the clustered colleague network centred on ``self_member``.

    Self is connected to every kept member scoring at least
    ``min_similarity``. Other pairs are connected when they score at least
    1.5 × ``min_similarity``, or when they sit in different top-level units
    that appear in the synergy map.

    Raises:
        AffinityError: If ``max_per_cluster`` < 1.
        InvalidWeightsError: If ``weights`` is invalid.
    """
    if max_per_cluster < 1:
        raise AffinityError(f"max_per_cluster must be >= 1, got {max_per_cluster}")
    if canvas_size is None:
        canvas = CanvasSize()
    elif isinstance(canvas_size, CanvasSize):
        canvas = canvas_size
    else:
        canvas = CanvasSize(width=canvas_size[0], height=canvas_size[1])
    w = validate_weights(weights)

    others = _dedupe(self_member, other_members)
    groups = group_by_unit([self_member, *others], max_per_cluster)
    centers, radius = cluster_centers(len(groups), canvas)

    clusters: list[ClusterDefinition] = []
    nodes: list[GraphNode] = []
    kept: list[Member] = []
    for (unit, bucket), center in zip(groups.items(), centers):
        cluster = ClusterDefinition(
            id=f"cluster-{unit}",
            label=unit,
            color=cluster_color(unit),
            member_ids=[m.id for m in bucket],
            center=center,
            radius=radius,
        )
        clusters.append(cluster)
        positions = seed_positions(bucket, center, radius, self_member.id)
        for m in bucket:
            kept.append(m)
            nodes.append(GraphNode(
                id=m.id,
                name=m.name,
                unit=unit,
                org_path=m.org_path,
                job_level=m.job_level,
                location=m.location,
                personality=m.personality,
                tags=m.tags,
                is_self=m.id == self_member.id,
                cluster_id=cluster.id,
                position=positions[m.id],
            ))

    edges: list[GraphEdge] = []
    peers = [m for m in kept if m.id != self_member.id]

    for m in peers:
        score = score_affinity(self_member, m, weights=w)
        if score.total >= min_similarity:
            edges.append(make_edge(self_member, m, score))

    peer_threshold = min_similarity * PEER_THRESHOLD_FACTOR
    for i, a in enumerate(peers):
        for b in peers[i + 1:]:
            score = score_affinity(a, b, weights=w)
            synergy = unit_of(a) != unit_of(b) and has_high_synergy(unit_of(a), unit_of(b))
            if score.total >= peer_threshold or synergy:
                edges.append(make_edge(a, b, score))

    average = sum(e.similarity for e in edges) / len(edges) if edges else 0.0
    stats = GraphStats(
        total_nodes=len(nodes),
        total_edges=len(edges),
        cluster_count=len(clusters),
        average_similarity=average,
    )
    logger.info(
        "Built graph for %s: %d nodes, %d edges, %d clusters",
        self_member.id, stats.total_nodes, stats.total_edges, stats.cluster_count,
    )
    return NetworkGraph(clusters=clusters, nodes=nodes, edges=edges, stats=stats)


# ---------------------------------------------------------------------------
# Graph helpers
# ---------------------------------------------------------------------------
def filter_edges_by_similarity(edges: Sequence[GraphEdge], min_similarity: float) -> list[GraphEdge]:
    return [e for e in edges if e.similarity >= min_similarity]


def connected_edges(node_id: str, edges: Sequence[GraphEdge]) -> list[GraphEdge]:
    return [e for e in edges if node_id in (e.source, e.target)]


def connected_node_ids(node_id: str, edges: Sequence[GraphEdge]) -> set[str]:
    """The node itself plus every node sharing an edge with it."""
    ids = {node_id}
    for e in edges:
        if e.source == node_id:
            ids.add(e.target)
        elif e.target == node_id:
            ids.add(e.source)
    return ids


def collapsed_cluster_node(cluster: ClusterDefinition) -> GraphNode:
    """Stand-in node drawn in place of a collapsed cluster."""
    return GraphNode(
        id=cluster.id,
        name=cluster.label,
        unit=cluster.label,
        cluster_id=cluster.id,
        position=cluster.center,
    )
