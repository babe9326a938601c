"""Quad-strip tessellation of ribbon segments into independent triangle vertices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .geometry import Segment, Vec3, Vertex, normalize

DEGENERATE_EPSILON = 1e-3

# Corner order of the two triangles spanning rail points (top0, bottom0, top1, bottom1).
QUAD_WINDING = np.array((0, 1, 3, 0, 3, 2), dtype=np.intp)


def _rows_normalized(rows: np.ndarray) -> np.ndarray:
    with np.errstate(invalid="ignore", divide="ignore"):
        return rows / np.linalg.norm(rows, axis=1, keepdims=True)


def _interleave(top: np.ndarray, bottom: np.ndarray) -> np.ndarray:
    return np.stack((top, bottom), axis=1).reshape(-1, 3)


def quad_strip_to_vertices(points: np.ndarray, normals: np.ndarray, colors: np.ndarray) -> List[Vertex]:
    """
    Triangulate a rail-point strip laid out as top/bottom pairs.

    Every group of four consecutive rail points (stepping by one pair) becomes
    two triangles. Corners are copied, never shared.
    """

    points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    normals = np.asarray(normals, dtype=np.float64).reshape(-1, 3)
    colors = np.asarray(colors, dtype=np.float64).reshape(-1, 3)
    quad_count = max(0, (points.shape[0] - 2) // 2)
    if quad_count == 0:
        return []
    indices = (2 * np.arange(quad_count, dtype=np.intp)[:, None] + QUAD_WINDING[None, :]).reshape(-1)
    return [
        Vertex(position=position, normal=normal, color=color)
        for position, normal, color in zip(points[indices], normals[indices], colors[indices])
    ]


def _handle(direction: Vec3, chord: Vec3, epsilon: float) -> Vec3:
    if np.linalg.norm(direction) < epsilon:
        return normalize(chord)
    return direction


def tessellate_curved(segment: Segment, epsilon: float = DEGENERATE_EPSILON) -> List[Vertex]:
    """
    Tessellate a segment whose two end frames may point in different directions.

    Both rails are lerped between the end cross-sections and pushed out by
    alpha * (1 - alpha) * (start_dir - end_dir) so diverging ends do not pinch.
    At each step the cross-section is rebuilt around the rail midpoint with the
    interpolated thickness, which keeps the ribbon width constant through bends.
    """

    divisions = int(segment.divisions)
    if divisions < 1:
        return []

    start, end = segment.start, segment.end
    chord = segment.end_position - segment.start_position
    s_dir = _handle(start.direction, chord, epsilon)
    e_dir = _handle(end.direction, chord, epsilon)

    s_tangent = normalize(np.cross(start.normal, s_dir))
    e_tangent = normalize(np.cross(end.normal, e_dir))
    s_top = segment.start_position + 0.5 * start.thickness * s_tangent
    s_bot = segment.start_position - 0.5 * start.thickness * s_tangent
    e_top = segment.end_position + 0.5 * end.thickness * e_tangent
    e_bot = segment.end_position - 0.5 * end.thickness * e_tangent

    alpha = (np.arange(divisions + 1, dtype=np.float64) / divisions)[:, None]
    bulge = alpha * (1.0 - alpha) * (s_dir - e_dir)
    top = (1.0 - alpha) * s_top + alpha * e_top + bulge
    bottom = (1.0 - alpha) * s_bot + alpha * e_bot + bulge

    middle = 0.5 * (top + bottom)
    across = _rows_normalized(top - bottom)
    thickness = (1.0 - alpha) * start.thickness + alpha * end.thickness
    top = middle + 0.5 * thickness * across
    bottom = middle - 0.5 * thickness * across

    direction = (1.0 - alpha) * s_dir + alpha * e_dir
    normal = _rows_normalized(np.cross(direction, top - bottom))
    color = (1.0 - alpha) * start.color + alpha * end.color

    return quad_strip_to_vertices(
        _interleave(top, bottom),
        np.repeat(normal, 2, axis=0),
        np.repeat(color, 2, axis=0),
    )


@dataclass(frozen=True)
class StraightStrip:
    start_position: Vec3
    end_position: Vec3
    start_color: Vec3
    end_color: Vec3
    normal: Vec3
    thickness: float
    divisions: int


def tessellate_straight(strip: StraightStrip) -> List[Vertex]:
    """Uniformly subdivide a flat strip along its chord with a constant normal."""

    divisions = int(strip.divisions)
    if divisions < 1:
        return []
    chord = strip.end_position - strip.start_position
    direction = normalize(chord)
    tangent = normalize(np.cross(strip.normal, direction))
    step = float(np.linalg.norm(chord)) / divisions

    alpha = (np.arange(divisions + 1, dtype=np.float64) / divisions)[:, None]
    offsets = (np.arange(divisions + 1, dtype=np.float64) * step)[:, None] * direction
    top = strip.start_position + 0.5 * strip.thickness * tangent + offsets
    bottom = strip.start_position - 0.5 * strip.thickness * tangent + offsets
    normals = np.tile(np.asarray(strip.normal, dtype=np.float64), (2 * (divisions + 1), 1))
    color = (1.0 - alpha) * strip.start_color + alpha * strip.end_color

    return quad_strip_to_vertices(_interleave(top, bottom), normals, np.repeat(color, 2, axis=0))


__all__ = [
    "DEGENERATE_EPSILON",
    "QUAD_WINDING",
    "StraightStrip",
    "quad_strip_to_vertices",
    "tessellate_curved",
    "tessellate_straight",
]
