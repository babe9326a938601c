"""
Turtle walk that turns a compared reading frame into ribbon segments.

Each residue symbol selects one entry of a fixed 20-entry transition table.
An entry moves the turtle relative to its current frame (direction, normal,
tangent) and yields the next frame; the pair of frames becomes one Segment.
The walk state is an immutable accumulator threaded through `advance`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import DEFAULT_CONFIG, MeshConfig
from .diff import DiffResult
from .geometry import Frame, Segment, Vec3, Vertex, mix, normalize, vec3
from .mesher import tessellate_curved

AxisFn = Callable[[Vec3, Vec3, Vec3], Vec3]

LANE_COLOR_MULTIPLIERS = (1.2135, 1.8214, 1.5435)
LANE_PLANE_NORMAL = vec3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Transition:
    """One symbol's move: offsets and axes are functions of (direction, normal, tangent)."""

    position_delta: AxisFn
    direction: AxisFn
    normal: AxisFn
    divisions: int


def _in_plane(normal: AxisFn) -> Transition:
    return Transition(
        position_delta=lambda d, n, t: d,
        direction=lambda d, n, t: d,
        normal=normal,
        divisions=2,
    )


def _pivot(position_delta: AxisFn, direction: AxisFn, normal: AxisFn) -> Transition:
    return Transition(position_delta=position_delta, direction=direction, normal=normal, divisions=6)


def _toward_normal(normal: AxisFn) -> Transition:
    return _pivot(lambda d, n, t: 0.5 * d + 0.5 * n, lambda d, n, t: n, normal)


def _away_from_normal(normal: AxisFn) -> Transition:
    return _pivot(lambda d, n, t: 0.5 * d - 0.5 * n, lambda d, n, t: -n, normal)


def _toward_tangent(normal: AxisFn) -> Transition:
    return _pivot(lambda d, n, t: 0.5 * d + 0.5 * t, lambda d, n, t: t, normal)


def _away_from_tangent(normal: AxisFn) -> Transition:
    return _pivot(lambda d, n, t: 0.5 * d - 0.5 * t, lambda d, n, t: -t, normal)


TRANSITIONS: Tuple[Transition, ...] = (
    # 0-3: keep heading, roll the normal.
    _in_plane(lambda d, n, t: normalize(n + t)),
    _in_plane(lambda d, n, t: normalize(n - t)),
    _in_plane(lambda d, n, t: t),
    _in_plane(lambda d, n, t: -t),
    # 4-7: pitch onto the normal.
    _toward_normal(lambda d, n, t: normalize(-d + 0.5 * t)),
    _toward_normal(lambda d, n, t: normalize(-d - 0.5 * t)),
    _toward_normal(lambda d, n, t: normalize(-d + t)),
    _toward_normal(lambda d, n, t: normalize(-d - t)),
    # 8-11: pitch away from the normal.
    _away_from_normal(lambda d, n, t: normalize(d - 0.5 * t)),
    _away_from_normal(lambda d, n, t: normalize(d + 0.5 * t)),
    _away_from_normal(lambda d, n, t: normalize(d - t)),
    _away_from_normal(lambda d, n, t: normalize(d + t)),
    # 12-15: yaw onto the tangent.
    _toward_tangent(lambda d, n, t: normalize(n + 0.5 * d)),
    _toward_tangent(lambda d, n, t: normalize(n - 0.5 * d)),
    _toward_tangent(lambda d, n, t: normalize(n + d)),
    _toward_tangent(lambda d, n, t: normalize(n - d)),
    # 16-19: yaw away from the tangent.
    _away_from_tangent(lambda d, n, t: normalize(n + 0.5 * d)),
    _away_from_tangent(lambda d, n, t: normalize(n - 0.5 * d)),
    _away_from_tangent(lambda d, n, t: normalize(n + d)),
    _away_from_tangent(lambda d, n, t: normalize(n - d)),
)


def fract_pow(value: float, exponent: int) -> float:
    res = value ** exponent
    return res - math.floor(res)


def lane_color(lane_index: int) -> Vec3:
    """Deterministic pseudo-random colour for a lane."""
    return np.array([fract_pow(mult, lane_index) for mult in LANE_COLOR_MULTIPLIERS], dtype=np.float64)


def lane_origin(total_lanes: int, lane_index: int, radius: float) -> Tuple[Vec3, Vec3, Vec3]:
    """Return (position, direction, normal) of a lane on the central circle."""

    angle = lane_index * (2.0 * math.pi / total_lanes)
    direction = vec3(math.cos(angle), math.sin(angle), 0.0)
    return radius * direction, direction, LANE_PLANE_NORMAL.copy()


@dataclass(frozen=True)
class RibbonState:
    position: Vec3
    frame: Frame
    scale: float
    thickness_scale: float
    step: int = 0


def progress_fraction(step: int, residue_count: int) -> float:
    if residue_count <= 1:
        return 1.0
    return step / (residue_count - 1)


def advance(
    state: RibbonState,
    symbol: int,
    mismatch: bool,
    gradient: Tuple[Vec3, Vec3],
    residue_count: int,
    config: MeshConfig = DEFAULT_CONFIG,
) -> Tuple[RibbonState, Optional[Segment]]:
    """
    Apply one residue to the walk.

    The scale and thickness multipliers decay on every call. A symbol outside
    the transition table leaves position and frame where they were and yields
    no segment.
    """

    scale = state.scale * config.scale_decay
    thickness_scale = state.thickness_scale * config.thickness_decay
    step = state.step + 1
    if not 0 <= symbol < len(TRANSITIONS):
        return replace(state, scale=scale, thickness_scale=thickness_scale, step=step), None

    move = TRANSITIONS[symbol]
    frame = state.frame
    d, n, t = frame.direction, frame.normal, frame.tangent
    if mismatch:
        color = np.asarray(config.alarm_color, dtype=np.float64)
    else:
        color = mix(gradient[0], gradient[1], progress_fraction(step, residue_count))

    end_position = state.position + scale * move.position_delta(d, n, t)
    end_frame = Frame(
        direction=move.direction(d, n, t),
        normal=move.normal(d, n, t),
        thickness=thickness_scale * frame.thickness,
        color=color,
    )
    segment = Segment(
        start=frame.with_direction(0.5 * scale * frame.direction),
        start_position=state.position,
        end=end_frame.with_direction(0.5 * scale * end_frame.direction),
        end_position=end_position,
        divisions=move.divisions,
    )
    next_state = RibbonState(
        position=end_position,
        frame=end_frame,
        scale=scale,
        thickness_scale=thickness_scale,
        step=step,
    )
    return next_state, segment


def _symbols(diff: Union[DiffResult, Sequence[int]], explicit_flags: bool) -> List[Tuple[int, bool]]:
    if isinstance(diff, DiffResult) and explicit_flags:
        return list(zip(diff.codes, diff.mismatches))
    return [(abs(int(code)), int(code) < 0) for code in diff]


def initial_state(total_lanes: int, lane_index: int, config: MeshConfig = DEFAULT_CONFIG) -> RibbonState:
    position, direction, normal = lane_origin(total_lanes, lane_index, config.radius)
    accent = np.asarray(config.accent_color, dtype=np.float64)
    frame = Frame(
        direction=direction,
        normal=normal,
        thickness=config.initial_thickness,
        color=mix(lane_color(lane_index), accent, 0.0),
    )
    return RibbonState(position=position, frame=frame, scale=config.initial_scale, thickness_scale=1.0)


def generate(
    diff: Union[DiffResult, Sequence[int]],
    total_lanes: int,
    lane_index: int,
    config: Optional[MeshConfig] = None,
) -> List[Segment]:
    """Walk one compared reading frame and return its segments in residue order.

    `diff` may also be a plain sign-encoded list of codes.
    """

    config = config or DEFAULT_CONFIG
    symbols = _symbols(diff, config.flag_zero_mismatch)
    gradient = (lane_color(lane_index), np.asarray(config.accent_color, dtype=np.float64))
    state = initial_state(total_lanes, lane_index, config)
    segments: List[Segment] = []
    for symbol, mismatch in symbols:
        state, segment = advance(state, symbol, mismatch, gradient, len(symbols), config)
        if segment is not None:
            segments.append(segment)
    return segments


def ribbon_vertices(
    diff: Union[DiffResult, Sequence[int]],
    total_lanes: int,
    lane_index: int,
    config: Optional[MeshConfig] = None,
) -> List[Vertex]:
    config = config or DEFAULT_CONFIG
    vertices: List[Vertex] = []
    for segment in generate(diff, total_lanes, lane_index, config):
        vertices.extend(tessellate_curved(segment, epsilon=config.degenerate_epsilon))
    return vertices


__all__ = [
    "LANE_COLOR_MULTIPLIERS",
    "LANE_PLANE_NORMAL",
    "Transition",
    "TRANSITIONS",
    "RibbonState",
    "fract_pow",
    "lane_color",
    "lane_origin",
    "progress_fraction",
    "initial_state",
    "advance",
    "generate",
    "ribbon_vertices",
]
