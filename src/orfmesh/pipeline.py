"""Sequence + reference text -> packed ribbon mesh."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .codon import LogSink, OpenReadingFrame, decode
from .config import DEFAULT_CONFIG, MeshConfig
from .diff import DiffResult, compare_all
from .geometry import Vertex
from .packing import pack
from .ribbon import ribbon_vertices

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeshResult:
    orfs: List[OpenReadingFrame]
    reference_orfs: List[OpenReadingFrame]
    diffs: List[DiffResult]
    vertices: List[Vertex]
    # (first vertex, vertex count) of each reading frame's ribbon, in lane order.
    ranges: List[Tuple[int, int]]
    buffer: np.ndarray

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def mismatch_count(self) -> int:
        return sum(diff.mismatch_count for diff in self.diffs)


def build_mesh(
    sequence_text: str,
    reference_text: str,
    *,
    config: Optional[MeshConfig] = None,
    sink: Optional[LogSink] = None,
) -> MeshResult:
    """Decode both texts, compare frame by frame and mesh one ribbon lane per frame."""

    config = config or DEFAULT_CONFIG
    reference_orfs = decode(reference_text, sink)
    orfs = decode(sequence_text, sink)
    diffs = compare_all([orf.codons for orf in orfs], [orf.codons for orf in reference_orfs])

    vertices: List[Vertex] = []
    ranges: List[Tuple[int, int]] = []
    for lane_index, diff in enumerate(diffs):
        lane = ribbon_vertices(diff, len(diffs), lane_index, config)
        ranges.append((len(vertices), len(lane)))
        vertices.extend(lane)

    LOGGER.debug(
        "build_mesh orfs=%s reference_orfs=%s vertices=%s",
        len(orfs),
        len(reference_orfs),
        len(vertices),
    )
    return MeshResult(
        orfs=orfs,
        reference_orfs=reference_orfs,
        diffs=diffs,
        vertices=vertices,
        ranges=ranges,
        buffer=pack(vertices),
    )


def process(
    sequence_text: str,
    reference_text: str,
    *,
    config: Optional[MeshConfig] = None,
    sink: Optional[LogSink] = None,
) -> np.ndarray:
    """Return the packed vertex buffer (positions, normals, colours) for a sequence."""

    return build_mesh(sequence_text, reference_text, config=config, sink=sink).buffer


__all__ = ["MeshResult", "build_mesh", "process"]
