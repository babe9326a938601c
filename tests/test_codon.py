from __future__ import annotations

import pytest

from orfmesh.codon import CODON_STOP, codons_to_letters, decode, iter_codons, translate_triplet


@pytest.mark.parametrize(
    "triplet, expected",
    [
        ("ttt", 0),
        ("ttg", 1),
        ("tca", 2),
        ("tac", 3),
        ("taa", CODON_STOP),
        ("tag", CODON_STOP),
        ("tga", CODON_STOP),
        ("tgc", 4),
        ("tgg", 5),
        ("ctn", 1),
        ("cca", 6),
        ("cat", 7),
        ("cag", 8),
        ("cgc", 9),
        ("ata", 10),
        ("atg", 11),
        ("act", 12),
        ("aac", 13),
        ("aag", 14),
        ("agt", 2),
        ("aga", 9),
        ("gtt", 15),
        ("gcg", 16),
        ("gac", 17),
        ("gaa", 18),
        ("ggg", 19),
    ],
)
def test_translate_triplet_table(triplet: str, expected: int) -> None:
    assert translate_triplet(triplet) == expected


def test_translate_triplet_unmapped_falls_back_to_zero() -> None:
    assert translate_triplet("ATG") == 0
    assert translate_triplet("xyz") == 0
    assert translate_triplet("ttx") == 0
    assert translate_triplet("tgn") == 0


def test_translate_triplet_prefix_rules_ignore_third_base() -> None:
    # "at" maps everything except g to 10, including junk characters.
    assert translate_triplet("atx") == 10
    assert translate_triplet("tc?") == 2


def test_iter_codons_skips_line_breaks_and_drops_partial_window() -> None:
    assert list(iter_codons("at\ng\r\ntt")) == [(3, 11)]
    assert list(iter_codons("")) == []


def test_decode_emits_frames_in_order_with_offsets() -> None:
    lines: list[str] = []
    orfs = decode("atgttttaaatgctctaa", lines.append)
    assert [orf.codons for orf in orfs] == [(0,), (1,)]
    assert [(orf.index, orf.start, orf.end) for orf in orfs] == [(0, 2, 8), (1, 11, 17)]
    assert lines == [
        "protein 0 - from 2 to 8",
        "protein 1 - from 11 to 17",
        "parts count: 2",
    ]


def test_decode_is_frame_locked() -> None:
    # Nineteen characters with no in-frame stop codon.
    assert decode("atgtttaaaaatgctctaa", lambda _: None) == []


def test_decode_ignores_codons_before_start() -> None:
    orfs = decode("tttatgccctaa", lambda _: None)
    assert [orf.codons for orf in orfs] == [(6,)]


def test_decode_start_inside_frame_is_a_residue() -> None:
    orfs = decode("atgatgttttaa", lambda _: None)
    assert [orf.codons for orf in orfs] == [(11, 0)]


def test_decode_empty_frame_is_closed_without_emitting() -> None:
    lines: list[str] = []
    orfs = decode("atgtaaatgccctga", lines.append)
    assert [orf.codons for orf in orfs] == [(6,)]
    assert orfs[0].index == 0
    assert lines[-1] == "parts count: 1"


def test_decode_drops_unterminated_frame() -> None:
    lines: list[str] = []
    assert decode("atgtttccc", lines.append) == []
    assert lines == ["parts count: 0"]


def test_decode_unmapped_residues_fall_back_to_zero() -> None:
    orfs = decode("atgxxxtaa", lambda _: None)
    assert [orf.codons for orf in orfs] == [(0,)]


def test_decode_offsets_count_raw_characters() -> None:
    orfs = decode("atg\nttt\r\ntaa", lambda _: None)
    assert len(orfs) == 1
    assert (orfs[0].start, orfs[0].end) == (2, 11)


def test_open_reading_frame_behaves_like_a_sequence() -> None:
    orf = decode("atgtttgcttaa", lambda _: None)[0]
    assert len(orf) == 2
    assert list(orf) == [0, 16]
    assert orf[1] == 16


def test_codons_to_letters() -> None:
    assert codons_to_letters([11, 0, 19]) == "MFG"
    assert codons_to_letters([-2, 127]) == "??"
