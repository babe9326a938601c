"""Vector helpers and the frame/segment/vertex records shared by the ribbon pipeline."""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np

Vec3 = np.ndarray


def vec3(x: float, y: float, z: float) -> Vec3:
    return np.array((x, y, z), dtype=np.float64)


def normalize(vector: Vec3) -> Vec3:
    """Return `vector` scaled to unit length.

    A zero vector yields NaNs; callers that can hit one check the length first.
    """
    with np.errstate(invalid="ignore", divide="ignore"):
        return vector / np.linalg.norm(vector)


def mix(a: Vec3, b: Vec3, alpha: float) -> Vec3:
    return (1.0 - alpha) * a + alpha * b


@dataclass(frozen=True)
class Frame:
    """
    Local cross-section orientation of the ribbon at one point of its path.

    `tangent` is derived (direction x normal), never stored.
    """

    direction: Vec3
    normal: Vec3
    thickness: float
    color: Vec3

    @property
    def tangent(self) -> Vec3:
        return np.cross(self.direction, self.normal)

    def with_direction(self, direction: Vec3) -> "Frame":
        return replace(self, direction=direction)


@dataclass(frozen=True)
class Segment:
    """One extrusion step between two frames; the mesher's input unit.

    The frame directions act as curve handles: their length scales the bulge
    the mesher adds between the two ends.
    """

    start: Frame
    start_position: Vec3
    end: Frame
    end_position: Vec3
    divisions: int


@dataclass(frozen=True)
class Vertex:
    position: Vec3
    normal: Vec3
    color: Vec3


__all__ = [
    "Vec3",
    "vec3",
    "normalize",
    "mix",
    "Frame",
    "Segment",
    "Vertex",
]
