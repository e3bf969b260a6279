"""Force-directed layout simulator.

Each iteration resets velocities, applies inverse-square repulsion between
every node pair, similarity-weighted spring attraction along every edge and a
weak pull toward the canvas centre, then moves each node by at most
``max_step × temperature`` (temperature decays linearly from 1 to 0) and
keeps it inside the canvas margin.

The simulation draws no random numbers: identical seeds, edges and
iteration counts give identical output.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Mapping, Sequence

import numpy as np
from pydantic import BaseModel, Field

from lib_affinity.graph_models import CanvasSize, GraphEdge, GraphNode, NetworkGraph, Point

logger = logging.getLogger(__name__)

# Golden angle, used to pick a fixed separation direction for coincident nodes.
_GOLDEN_ANGLE = math.pi * (3 - math.sqrt(5))


class LayoutConfig(BaseModel):
    """Physical constants of the simulation."""

    repulsion_constant: float = Field(default=5000.0, ge=0.0)
    spring_constant: float = Field(default=100.0, gt=0.0)
    gravity: float = Field(default=0.01, ge=0.0)
    max_step: float = Field(default=50.0, gt=0.0)
    margin: float = Field(default=50.0, ge=0.0)
    epsilon: float = Field(default=0.01, gt=0.0)


DEFAULT_LAYOUT_CONFIG = LayoutConfig()


def _canvas(canvas_size: CanvasSize | tuple[float, float] | None) -> CanvasSize:
    if canvas_size is None:
        return CanvasSize()
    if isinstance(canvas_size, CanvasSize):
        return canvas_size
    return CanvasSize(width=canvas_size[0], height=canvas_size[1])


def _seed(nodes: Sequence[GraphNode] | Mapping[str, Point]) -> tuple[list[str], np.ndarray]:
    if isinstance(nodes, Mapping):
        items = [(node_id, p.x, p.y) for node_id, p in nodes.items()]
    else:
        items = [(n.id, n.position.x, n.position.y) for n in nodes]
    ids = [node_id for node_id, _, _ in items]
    positions = np.array([[x, y] for _, x, y in items], dtype=float).reshape(len(items), 2)
    return ids, positions


def _edge_arrays(
    edges: Sequence[GraphEdge],
    index: Mapping[str, int],
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    src: list[int] = []
    dst: list[int] = []
    weight: list[float] = []
    for e in edges:
        i = index.get(e.source)
        j = index.get(e.target)
        if i is None or j is None or i == j:
            logger.debug("Skipping edge %s: endpoint missing or self-loop", e.id)
            continue
        src.append(i)
        dst.append(j)
        weight.append(e.similarity)
    return np.array(src, dtype=int), np.array(dst, dtype=int), np.array(weight, dtype=float)


def _coincident_directions(n: int) -> np.ndarray:
    """Fixed unit vectors (n, n, 2), antisymmetric, for separating stacked nodes."""
    i, j = np.meshgrid(np.arange(n), np.arange(n), indexing="ij")
    lo = np.minimum(i, j)
    hi = np.maximum(i, j)
    angle = _GOLDEN_ANGLE * (lo * n + hi + 1)
    sign = np.where(i < j, 1.0, -1.0)
    return np.stack([np.cos(angle), np.sin(angle)], axis=-1) * sign[..., None]


def _repulsion(pos: np.ndarray, cfg: LayoutConfig, stacked: np.ndarray) -> np.ndarray:
    delta = pos[:, None, :] - pos[None, :, :]
    dist = np.linalg.norm(delta, axis=-1)
    with np.errstate(invalid="ignore", divide="ignore"):
        unit = np.where(dist[..., None] > 0, delta / dist[..., None], stacked)
    magnitude = cfg.repulsion_constant / (dist + cfg.epsilon) ** 2
    np.fill_diagonal(magnitude, 0.0)
    return np.sum(unit * magnitude[..., None], axis=1)


def _attraction(
    pos: np.ndarray,
    src: np.ndarray,
    dst: np.ndarray,
    weight: np.ndarray,
    cfg: LayoutConfig,
) -> np.ndarray:
    force = np.zeros_like(pos)
    if src.size == 0:
        return force
    delta = pos[dst] - pos[src]
    dist = np.linalg.norm(delta, axis=-1)
    magnitude = dist ** 2 / cfg.spring_constant * weight
    with np.errstate(invalid="ignore", divide="ignore"):
        unit = np.where(dist[:, None] > 0, delta / dist[:, None], 0.0)
    pull = unit * magnitude[:, None]
    np.add.at(force, src, pull)
    np.add.at(force, dst, -pull)
    return force


def _clamp_steps(velocity: np.ndarray, limit: float) -> np.ndarray:
    length = np.linalg.norm(velocity, axis=-1)
    scale = np.where(length > limit, limit / np.where(length > 0, length, 1.0), 1.0)
    return velocity * scale[:, None]


def layout(
    nodes: Sequence[GraphNode] | Mapping[str, Point],
    edges: Sequence[GraphEdge],
    canvas_size: CanvasSize | tuple[float, float] | None = None,
    iterations: int = 120,
    config: LayoutConfig | None = None,
    time_budget: float | None = None,
) -> dict[str, Point]:
    """Run the simulation and return the final position of every node.

    Args:
        nodes: Nodes with seed positions (or a mapping ``id → Point``).
        edges: Weighted edges; ``similarity`` scales the spring pull.
        canvas_size: Canvas bounds (default 800×600).
        iterations: Number of simulation steps.
        config: Physical constants (default :data:`DEFAULT_LAYOUT_CONFIG`).
        time_budget: Optional wall-clock limit in seconds; the simulation stops
            after the step that exceeds it.

    Returns:
        Mapping of node id to final position.
    """
    cfg = config or DEFAULT_LAYOUT_CONFIG
    canvas = _canvas(canvas_size)
    ids, pos = _seed(nodes)
    n = len(ids)
    if n == 0:
        return {}

    index = {node_id: i for i, node_id in enumerate(ids)}
    src, dst, weight = _edge_arrays(edges, index)
    stacked = _coincident_directions(n)
    center = np.array([canvas.width / 2, canvas.height / 2])
    margin_x = min(cfg.margin, canvas.width / 2)
    margin_y = min(cfg.margin, canvas.height / 2)
    lower = np.array([margin_x, margin_y])
    upper = np.array([canvas.width - margin_x, canvas.height - margin_y])

    started = time.monotonic()
    steps = max(iterations, 0)
    for step in range(steps):
        velocity = np.zeros_like(pos)
        if n > 1:
            velocity += _repulsion(pos, cfg, stacked)
        velocity += _attraction(pos, src, dst, weight, cfg)
        velocity += (center - pos) * cfg.gravity

        temperature = 1.0 - step / steps
        velocity = _clamp_steps(velocity, cfg.max_step * temperature)
        pos = np.clip(pos + velocity, lower, upper)

        if time_budget is not None and time.monotonic() - started > time_budget:
            logger.warning("Layout stopped after %d/%d iterations (time budget)", step + 1, steps)
            break

    logger.info("Layout finished: %d nodes, %d edges, %d iterations", n, src.size, steps)
    return {node_id: Point(x=float(pos[i, 0]), y=float(pos[i, 1])) for i, node_id in enumerate(ids)}


def fit_layout_to_canvas(
    positions: Mapping[str, Point],
    canvas_size: CanvasSize | tuple[float, float] | None = None,
    padding: float = 50.0,
) -> dict[str, Point]:
    """Centre ``positions`` on the canvas, shrinking them to fit inside ``padding``.

    The layout is only ever scaled down, never up. A zero-width or
    zero-height spread is treated as one unit wide.
    """
    if not positions:
        return {}
    canvas = _canvas(canvas_size)
    ids, pos = _seed(positions)

    low = pos.min(axis=0)
    spread = pos.max(axis=0) - low
    spread[spread == 0] = 1.0
    available = np.array([canvas.width - 2 * padding, canvas.height - 2 * padding])
    scale = min(float(np.min(available / spread)), 1.0)

    offset = (np.array([canvas.width, canvas.height]) - spread * scale) / 2 - low * scale
    fitted = pos * scale + offset
    return {node_id: Point(x=float(fitted[i, 0]), y=float(fitted[i, 1])) for i, node_id in enumerate(ids)}


def layout_graph(
    graph: NetworkGraph,
    canvas_size: CanvasSize | tuple[float, float] | None = None,
    iterations: int = 120,
    config: LayoutConfig | None = None,
    time_budget: float | None = None,
) -> NetworkGraph:
    """Return a copy of ``graph`` with node positions replaced by the layout result."""
    positions = layout(graph.nodes, graph.edges, canvas_size, iterations, config, time_budget)
    nodes = [n.model_copy(update={"position": positions[n.id]}) for n in graph.nodes]
    return graph.model_copy(update={"nodes": nodes})
