from __future__ import annotations

import numpy as np
import pytest

from orfmesh.geometry import Vertex, vec3
from orfmesh.packing import pack, unpack, vertex_count


def _vertices(count: int) -> list[Vertex]:
    return [
        Vertex(
            position=vec3(i, i + 0.25, i + 0.5),
            normal=vec3(0.0, 0.0, 1.0),
            color=vec3(0.1 * i, 0.2, 0.3),
        )
        for i in range(count)
    ]


def test_pack_layout_is_attribute_major() -> None:
    vertices = _vertices(4)
    buffer = pack(vertices)
    assert buffer.dtype == np.float32
    assert buffer.shape == (9 * 4,)
    expected_positions = np.array([v.position for v in vertices], dtype=np.float32).ravel()
    np.testing.assert_allclose(buffer[: 3 * 4], expected_positions)
    np.testing.assert_allclose(buffer[3 * 4 : 6 * 4], np.tile([0.0, 0.0, 1.0], 4))
    np.testing.assert_allclose(buffer[6 * 4 + 3 : 6 * 4 + 6], (0.1, 0.2, 0.3), rtol=1e-6)


def test_pack_empty() -> None:
    buffer = pack([])
    assert buffer.shape == (0,)
    assert vertex_count(buffer) == 0


def test_unpack_splits_blocks() -> None:
    vertices = _vertices(3)
    positions, normals, colors = unpack(pack(vertices))
    assert positions.shape == normals.shape == colors.shape == (3, 3)
    np.testing.assert_allclose(positions[2], (2.0, 2.25, 2.5))
    np.testing.assert_allclose(colors[1], (0.1, 0.2, 0.3), rtol=1e-6)


def test_unpack_rejects_partial_vertices() -> None:
    with pytest.raises(ValueError):
        unpack(np.zeros(10, dtype=np.float32))
