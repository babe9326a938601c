"""orfmesh command line: inspect reading frames and export ribbon meshes."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import io as mesh_io
from .codon import codons_to_letters, decode
from .config import env_log_level, resolve_mesh_config
from .pipeline import build_mesh

LOGGER = logging.getLogger(__name__)


def _load_sequence_arg(sequence: Optional[str], path: Optional[Path], *, label: str = "sequence") -> Optional[str]:
    if sequence and path:
        raise ValueError(f"Provide either an inline {label} or a file path, not both.")
    if path:
        return mesh_io.read_sequence(path)
    if sequence:
        return mesh_io.normalize_sequence(sequence)
    return None


def _require_sequence(args: argparse.Namespace) -> str:
    sequence = _load_sequence_arg(args.sequence, args.input)
    if sequence is None:
        raise ValueError("Missing sequence data; use --sequence or --input.")
    return sequence


def _reference_or_self(args: argparse.Namespace, sequence: str) -> str:
    reference = _load_sequence_arg(args.reference, args.reference_input, label="reference")
    if reference is None:
        LOGGER.info("No reference supplied; comparing the sequence against itself.")
        return sequence
    return reference


def command_orfs(args: argparse.Namespace) -> None:
    sequence = _require_sequence(args)
    orfs = decode(sequence)
    if not orfs:
        print("No reading frames found.")
        return
    for orf in orfs:
        print(f"orf={orf.index:>3} start={orf.start:>6} end={orf.end:>6} length_aa={len(orf):>4} residues={codons_to_letters(orf.codons)}")
    print(f"Reading frames: {len(orfs)}")


def command_mesh(args: argparse.Namespace) -> None:
    sequence = _require_sequence(args)
    reference = _reference_or_self(args, sequence)
    config = resolve_mesh_config(args.config)
    result = build_mesh(sequence, reference, config=config)
    fmt = mesh_io.write_buffer(result.buffer, args.output, args.format)
    print(
        f"Reading frames: {len(result.orfs)}  mismatches: {result.mismatch_count}  "
        f"vertices: {result.vertex_count}"
    )
    print(f"Mesh buffer ({fmt}) saved to {args.output}")


def command_preview(args: argparse.Namespace) -> None:
    from .viz import render_preview

    if args.buffer:
        buffer = mesh_io.read_buffer(args.buffer)
    else:
        sequence = _require_sequence(args)
        reference = _reference_or_self(args, sequence)
        buffer = build_mesh(sequence, reference, config=resolve_mesh_config(args.config)).buffer
    triangles = render_preview(buffer, args.output, title=args.title, elev=args.elev, azim=args.azim)
    print(f"Preview with {triangles} triangles saved to {args.output}")


def _add_sequence_args(parser: argparse.ArgumentParser, *, with_reference: bool) -> None:
    parser.add_argument("--sequence", help="Inline nucleotide string.")
    parser.add_argument("--input", type=Path, help="Path to a FASTA/text file with the sequence.")
    if with_reference:
        parser.add_argument("--reference", help="Inline reference nucleotide string (defaults to the sequence).")
        parser.add_argument("--reference-input", type=Path, help="Path to a FASTA/text reference file.")
        parser.add_argument("--config", type=Path, help="Mesh parameter YAML (defaults to $ORFMESH_CONFIG).")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Translate nucleotide sequences into ORF ribbon meshes highlighting reference mismatches.",
    )
    parser.add_argument(
        "--log-level",
        default=env_log_level(),
        help="Logging level (default: $ORFMESH_LOG_LEVEL or WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    orfs = subparsers.add_parser("orfs", help="List the reading frames decoded from a sequence.")
    _add_sequence_args(orfs, with_reference=False)
    orfs.set_defaults(func=command_orfs)

    mesh = subparsers.add_parser("mesh", help="Build the ribbon mesh and write the packed vertex buffer.")
    _add_sequence_args(mesh, with_reference=True)
    mesh.add_argument("--output", type=Path, required=True, help="Output path (.bin, .npy or .json).")
    mesh.add_argument("--format", choices=mesh_io.BUFFER_FORMATS, help="Override the format inferred from --output.")
    mesh.set_defaults(func=command_mesh)

    preview = subparsers.add_parser("preview", help="Render a PNG preview of the ribbon mesh.")
    _add_sequence_args(preview, with_reference=True)
    preview.add_argument("--buffer", type=Path, help="Render a previously written buffer instead of a sequence.")
    preview.add_argument("--output", type=Path, default=Path("orfmesh_preview.png"), help="PNG path (default: orfmesh_preview.png).")
    preview.add_argument("--title", default="ORF ribbons", help="Figure title.")
    preview.add_argument("--elev", type=float, default=35.0, help="Camera elevation in degrees (default: 35).")
    preview.add_argument("--azim", type=float, default=-60.0, help="Camera azimuth in degrees (default: -60).")
    preview.set_defaults(func=command_preview)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=str(args.log_level).upper(), format="%(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
    except (ValueError, OSError) as exc:
        raise SystemExit(f"orfmesh: {exc}") from exc


if __name__ == "__main__":
    main(sys.argv[1:])
