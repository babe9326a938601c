"""Reading sequence files and writing packed mesh buffers."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import numpy as np

from .packing import FLOATS_PER_VERTEX, unpack

BUFFER_FORMATS = ("bin", "npy", "json")


def normalize_sequence(raw: str) -> str:
    """Drop FASTA headers and whitespace, lowercase the remaining bases."""

    lines = [line for line in raw.splitlines() if not line.lstrip().startswith(">")]
    return "".join("".join(lines).split()).lower()


def read_sequence(path: Path) -> str:
    return normalize_sequence(Path(path).read_text(encoding="utf-8"))


def _resolve_format(path: Path, fmt: Optional[str]) -> str:
    token = (fmt or path.suffix.lstrip(".") or "bin").lower()
    if token not in BUFFER_FORMATS:
        raise ValueError(f"Unsupported buffer format '{token}'. Choose one of: {', '.join(BUFFER_FORMATS)}.")
    return token


def write_buffer(buffer: np.ndarray, path: Path, fmt: Optional[str] = None) -> str:
    """
    Write a packed buffer and return the format used.

    `bin` is raw little-endian float32, ready for a `Float32Array`; `json`
    splits the attribute blocks into named lists.
    """

    out = Path(path)
    token = _resolve_format(out, fmt)
    flat = np.asarray(buffer, dtype="<f4").reshape(-1)
    if token == "bin":
        out.write_bytes(flat.tobytes())
    elif token == "npy":
        with out.open("wb") as handle:
            np.save(handle, flat)
    else:
        positions, normals, colors = unpack(flat)
        payload = {
            "vertex_count": int(flat.size // FLOATS_PER_VERTEX),
            "positions": positions.reshape(-1).tolist(),
            "normals": normals.reshape(-1).tolist(),
            "colors": colors.reshape(-1).tolist(),
        }
        out.write_text(json.dumps(payload), encoding="utf-8")
    return token


def read_buffer(path: Path, fmt: Optional[str] = None) -> np.ndarray:
    src = Path(path)
    token = _resolve_format(src, fmt)
    if token == "bin":
        return np.frombuffer(src.read_bytes(), dtype="<f4").astype(np.float32)
    if token == "npy":
        return np.load(src).astype(np.float32).reshape(-1)
    payload = json.loads(src.read_text(encoding="utf-8"))
    return np.concatenate(
        [np.asarray(payload[key], dtype=np.float32) for key in ("positions", "normals", "colors")]
    )


__all__ = ["BUFFER_FORMATS", "normalize_sequence", "read_sequence", "write_buffer", "read_buffer"]
