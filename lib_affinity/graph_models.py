"""Clustered network graph models shared by graph building and layout."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


ConnectionType = Literal["same_unit", "cross_unit"]
StrengthTier = Literal["weak", "moderate", "strong"]


class Point(BaseModel):
    x: float
    y: float


class CanvasSize(BaseModel):
    width: float = Field(default=800.0, gt=0)
    height: float = Field(default=600.0, gt=0)


class ClusterDefinition(BaseModel):
    """One top-level organizational unit drawn as a group on the canvas."""

    id: str
    label: str
    color: str
    member_ids: list[str] = Field(default_factory=list)
    center: Point
    radius: float = Field(ge=0.0)
    expanded: bool = True


class GraphNode(BaseModel):
    """A member placed on the canvas."""

    id: str
    name: str = ""
    unit: str
    org_path: list[str] = Field(default_factory=list)
    job_level: str | None = None
    location: str | None = None
    personality: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_self: bool = False
    cluster_id: str
    position: Point


class GraphEdge(BaseModel):
    """A scored, classified connection between two members."""

    id: str
    source: str
    target: str
    similarity: float = Field(ge=0.0, le=1.0)
    common_tags: list[str] = Field(default_factory=list)
    connection_type: ConnectionType
    strength: StrengthTier
    personality_compatible: bool = False


class GraphStats(BaseModel):
    total_nodes: int = Field(ge=0)
    total_edges: int = Field(ge=0)
    cluster_count: int = Field(ge=0)
    average_similarity: float = Field(ge=0.0, le=1.0)


class NetworkGraph(BaseModel):
    """Result of :func:`lib_affinity.engine.clustering.build_graph`."""

    clusters: list[ClusterDefinition] = Field(default_factory=list)
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    stats: GraphStats
