"""orfmesh: nucleotide sequences to ORF ribbon meshes."""

from importlib import metadata

from . import codon, config, diff, geometry, mesher, packing, pipeline, ribbon
from .codon import OpenReadingFrame, decode, translate_triplet
from .config import MeshConfig, MeshConfigError, load_mesh_config, resolve_mesh_config
from .diff import NO_DATA, DiffResult, compare, compare_all
from .geometry import Frame, Segment, Vertex
from .mesher import StraightStrip, quad_strip_to_vertices, tessellate_curved, tessellate_straight
from .packing import pack, unpack
from .pipeline import MeshResult, build_mesh, process
from .ribbon import TRANSITIONS, generate, ribbon_vertices

try:  # pragma: no cover - metadata only at runtime
    __version__ = metadata.version("orfmesh")
except metadata.PackageNotFoundError:  # pragma: no cover - source tree / editable installs
    __version__ = "0.0.0"

__all__ = [
    "codon",
    "config",
    "diff",
    "geometry",
    "mesher",
    "packing",
    "pipeline",
    "ribbon",
    "OpenReadingFrame",
    "decode",
    "translate_triplet",
    "MeshConfig",
    "MeshConfigError",
    "load_mesh_config",
    "resolve_mesh_config",
    "NO_DATA",
    "DiffResult",
    "compare",
    "compare_all",
    "Frame",
    "Segment",
    "Vertex",
    "StraightStrip",
    "quad_strip_to_vertices",
    "tessellate_curved",
    "tessellate_straight",
    "pack",
    "unpack",
    "MeshResult",
    "build_mesh",
    "process",
    "TRANSITIONS",
    "generate",
    "ribbon_vertices",
    "__version__",
]
