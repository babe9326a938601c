"""Static PNG previews of packed ribbon meshes (matplotlib, Agg backend)."""
from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from .packing import unpack

RC = {
    "figure.dpi": 120,
    "savefig.dpi": 120,
    "font.size": 10,
    "axes.facecolor": "white",
}

try:  # pragma: no cover - importlib metadata path only runs once
    ORFMESH_VERSION = metadata.version("orfmesh")
except metadata.PackageNotFoundError:  # pragma: no cover - editable installs
    ORFMESH_VERSION = "dev"


def apply_rc() -> None:
    for key, value in RC.items():
        plt.rcParams[key] = value


def triangles_from_buffer(buffer: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Return (triangles (T, 3, 3), face colours (T, 3)) from a packed buffer."""

    positions, _normals, colors = unpack(buffer)
    count = positions.shape[0] - positions.shape[0] % 3
    triangles = positions[:count].reshape(-1, 3, 3)
    face_colors = np.clip(colors[:count].reshape(-1, 3, 3).mean(axis=1), 0.0, 1.0)
    return triangles, face_colors


def render_preview(
    buffer: np.ndarray,
    output: Path,
    *,
    title: str = "ORF ribbons",
    elev: float = 35.0,
    azim: float = -60.0,
    footer: Optional[str] = None,
) -> int:
    """Render the mesh to `output` and return the number of triangles drawn."""

    apply_rc()
    triangles, face_colors = triangles_from_buffer(buffer)
    fig = plt.figure(figsize=(6, 6))
    ax = fig.add_subplot(projection="3d")
    if len(triangles):
        collection = Poly3DCollection(triangles, facecolors=face_colors, edgecolors="none", linewidths=0.0)
        ax.add_collection3d(collection)
        points = triangles.reshape(-1, 3)
        lo, hi = points.min(axis=0), points.max(axis=0)
        center = 0.5 * (lo + hi)
        half = max(float((hi - lo).max()) * 0.5, 1e-3)
        ax.set_xlim(center[0] - half, center[0] + half)
        ax.set_ylim(center[1] - half, center[1] + half)
        ax.set_zlim(center[2] - half, center[2] + half)
    else:
        ax.text2D(0.5, 0.5, "no reading frames", transform=ax.transAxes, ha="center", va="center")
    ax.view_init(elev=elev, azim=azim)
    ax.set_axis_off()
    ax.set_title(title)
    fig.text(
        0.01,
        0.01,
        footer or f"orfmesh {ORFMESH_VERSION} • {len(triangles)} triangles",
        fontsize=8,
        color="#555555",
        ha="left",
        va="bottom",
        alpha=0.85,
    )
    fig.savefig(output, facecolor="white")
    plt.close(fig)
    return int(len(triangles))


__all__ = ["render_preview", "triangles_from_buffer", "apply_rc", "ORFMESH_VERSION"]
