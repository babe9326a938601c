"""Flatten vertices into the attribute-major float buffer consumed by the viewer."""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from .geometry import Vertex

FLOATS_PER_VERTEX = 9


def pack(vertices: Sequence[Vertex]) -> np.ndarray:
    """
    Return a float32 buffer: every position, then every normal, then every colour.

    Each block keeps the vertex order of `vertices`.
    """

    if not vertices:
        return np.zeros((0,), dtype=np.float32)
    positions = np.array([vertex.position for vertex in vertices], dtype=np.float32)
    normals = np.array([vertex.normal for vertex in vertices], dtype=np.float32)
    colors = np.array([vertex.color for vertex in vertices], dtype=np.float32)
    return np.concatenate((positions.ravel(), normals.ravel(), colors.ravel()))


def unpack(buffer: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split a packed buffer back into (positions, normals, colors), each shaped (N, 3)."""

    flat = np.asarray(buffer, dtype=np.float32).reshape(-1)
    if flat.size % FLOATS_PER_VERTEX:
        raise ValueError(f"Packed buffer length {flat.size} is not a multiple of {FLOATS_PER_VERTEX}.")
    size = flat.size // 3
    return (
        flat[:size].reshape(-1, 3),
        flat[size : 2 * size].reshape(-1, 3),
        flat[2 * size :].reshape(-1, 3),
    )


def vertex_count(buffer: np.ndarray) -> int:
    return int(np.asarray(buffer).size // FLOATS_PER_VERTEX)


__all__ = ["FLOATS_PER_VERTEX", "pack", "unpack", "vertex_count"]
