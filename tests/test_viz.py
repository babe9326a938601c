from __future__ import annotations

from pathlib import Path

import numpy as np

from orfmesh.pipeline import process
from orfmesh.viz import render_preview, triangles_from_buffer


def test_triangles_from_buffer_shapes() -> None:
    buffer = process("atgtttgcttaa", "atgtttgcttaa", sink=lambda _: None)
    triangles, colors = triangles_from_buffer(buffer)
    assert triangles.shape == (16, 3, 3)
    assert colors.shape == (16, 3)
    assert (colors >= 0.0).all() and (colors <= 1.0).all()


def test_render_preview_writes_png(tmp_path: Path) -> None:
    buffer = process("atgtttgcttaa", "atgtttgattaa", sink=lambda _: None)
    output = tmp_path / "preview.png"
    assert render_preview(buffer, output) == 16
    assert output.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_render_preview_empty_buffer(tmp_path: Path) -> None:
    output = tmp_path / "empty.png"
    assert render_preview(np.zeros(0, dtype=np.float32), output) == 0
    assert output.exists()
