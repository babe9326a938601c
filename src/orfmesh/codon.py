"""Nucleotide triplet translation and open-reading-frame segmentation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

LOGGER = logging.getLogger(__name__)

LogSink = Callable[[str], None]

CODON_START = 11
CODON_STOP = 127
CODON_FALLBACK = 0
AMINO_ACID_COUNT = 20

# One-letter residue names indexed by codon code.
AMINO_ACID_LETTERS = "FLSYCWPHQRIMTNKVADEG"

_SKIPPED = frozenset("\r\n")

# Keyed by the first two bases. An int applies to any third character; a
# (mapping, default) pair looks the third base up and falls back to default.
_Rule = Union[int, Tuple[Mapping[str, int], int]]


def _pyrimidine_purine(pyr: int, pur: int) -> _Rule:
    return {"t": pyr, "c": pyr, "a": pur, "g": pur}, CODON_FALLBACK


_PREFIX_RULES: Dict[str, _Rule] = {
    "tt": _pyrimidine_purine(0, 1),
    "tc": 2,
    "ta": _pyrimidine_purine(3, CODON_STOP),
    "tg": ({"t": 4, "c": 4, "g": 5, "a": CODON_STOP}, CODON_FALLBACK),
    "ct": 1,
    "cc": 6,
    "ca": _pyrimidine_purine(7, 8),
    "cg": 9,
    "at": ({"g": CODON_START}, 10),
    "ac": 12,
    "aa": _pyrimidine_purine(13, 14),
    "ag": _pyrimidine_purine(2, 9),
    "gt": 15,
    "gc": 16,
    "ga": _pyrimidine_purine(17, 18),
    "gg": 19,
}


def translate_triplet(triplet: str) -> int:
    """Return the codon code for a three-character window (0 when unmapped)."""

    rule = _PREFIX_RULES.get(triplet[:2])
    if rule is None:
        return CODON_FALLBACK
    if isinstance(rule, int):
        return rule
    mapping, default = rule
    return mapping.get(triplet[2:3], default)


def iter_codons(text: str) -> Iterator[Tuple[int, int]]:
    """
    Yield `(offset, code)` for every complete triplet in `text`.

    Only carriage returns and newlines are skipped; any other character is
    consumed into the current window. `offset` is the index of the character
    that completed the window. A trailing partial window is dropped.
    """

    window: List[str] = []
    for offset, char in enumerate(text):
        if char in _SKIPPED:
            continue
        window.append(char)
        if len(window) == 3:
            yield offset, translate_triplet("".join(window))
            window.clear()


@dataclass(frozen=True)
class OpenReadingFrame:
    index: int
    start: int
    end: int
    codons: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.codons)

    def __iter__(self):
        return iter(self.codons)

    def __getitem__(self, item):
        return self.codons[item]


class _ScanState(Enum):
    SCANNING = "scanning"
    IN_ORF = "in_orf"


def default_sink(message: str) -> None:
    LOGGER.info(message)


def decode(text: str, sink: Optional[LogSink] = None) -> List[OpenReadingFrame]:
    """
    Split `text` into open reading frames.

    A start codon opens a frame only while scanning; inside a frame it is an
    ordinary residue. A stop closes the frame and emits it when it holds at
    least one residue. Frames still open at the end of the input are dropped.
    """

    emit = sink or default_sink
    frames: List[OpenReadingFrame] = []
    state = _ScanState.SCANNING
    current: List[int] = []
    start = 0

    for offset, code in iter_codons(text):
        if state is _ScanState.SCANNING:
            if code == CODON_START:
                state = _ScanState.IN_ORF
                start = offset
            continue
        if code != CODON_STOP:
            current.append(code)
            continue
        if current:
            index = len(frames)
            emit(f"protein {index} - from {start} to {offset}")
            frames.append(OpenReadingFrame(index=index, start=start, end=offset, codons=tuple(current)))
            current = []
        state = _ScanState.SCANNING

    if state is _ScanState.IN_ORF:
        LOGGER.debug("decode dropped unterminated frame start=%s residues=%s", start, len(current))
    emit(f"parts count: {len(frames)}")
    return frames


def codons_to_letters(codons, unknown: str = "?") -> str:
    return "".join(
        AMINO_ACID_LETTERS[code] if 0 <= code < AMINO_ACID_COUNT else unknown for code in codons
    )


__all__ = [
    "CODON_START",
    "CODON_STOP",
    "CODON_FALLBACK",
    "AMINO_ACID_COUNT",
    "AMINO_ACID_LETTERS",
    "LogSink",
    "OpenReadingFrame",
    "default_sink",
    "translate_triplet",
    "iter_codons",
    "decode",
    "codons_to_letters",
]
