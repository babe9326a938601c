"""Positional comparison of decoded reading frames against a reference."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

NO_DATA = -1


@dataclass(frozen=True)
class DiffResult:
    """
    Per-residue comparison of one reading frame against its reference.

    `mismatches` carries an explicit flag for every residue. Iterating or
    indexing the result yields the sign-encoded form (negated code on a
    mismatch), which cannot mark a mismatching code 0.
    """

    codes: Tuple[int, ...]
    mismatches: Tuple[bool, ...]

    def signed(self) -> List[int]:
        return [-code if flag else code for code, flag in zip(self.codes, self.mismatches)]

    def __len__(self) -> int:
        return len(self.codes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.signed())

    def __getitem__(self, index: int) -> int:
        code = self.codes[index]
        return -code if self.mismatches[index] else code

    @property
    def mismatch_count(self) -> int:
        return sum(self.mismatches)


def compare(data: Sequence[int], reference: Sequence[int]) -> DiffResult:
    """Compare `data` to `reference` index by index; missing reference slots never match."""

    ref_len = len(reference)
    codes = tuple(int(value) for value in data)
    mismatches = tuple(
        value != (reference[idx] if idx < ref_len else NO_DATA) for idx, value in enumerate(codes)
    )
    return DiffResult(codes=codes, mismatches=mismatches)


def compare_all(decoded: Sequence[Sequence[int]], references: Sequence[Sequence[int]]) -> List[DiffResult]:
    """
    Pair the i-th decoded frame with the i-th reference frame.

    Decoded frames past the end of `references` are compared against an
    all-NO_DATA reference; surplus reference frames are ignored.
    """

    results: List[DiffResult] = []
    for idx, frame in enumerate(decoded):
        reference = references[idx] if idx < len(references) else [NO_DATA] * len(frame)
        results.append(compare(frame, reference))
    return results


__all__ = ["NO_DATA", "DiffResult", "compare", "compare_all"]
