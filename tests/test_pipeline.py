from __future__ import annotations

import numpy as np

from orfmesh.config import DEFAULT_CONFIG
from orfmesh.packing import unpack
from orfmesh.pipeline import build_mesh, process

ALARM = np.array(DEFAULT_CONFIG.alarm_color, dtype=np.float32)

# Two frames: (F, A) and (L, W).
SEQUENCE = "atgtttgcttaa\nccc\natgcttggttga\n"
REFERENCE = "atgtttgcttaacccatgcttggttga"
MUTATED = "atgtttgattaacccatgcttggttga"


def _silent(_: str) -> None:
    return None


def test_process_empty_inputs_give_empty_buffer() -> None:
    buffer = process("", "", sink=_silent)
    assert buffer.shape == (0,)


def test_process_buffer_length_matches_vertices() -> None:
    result = build_mesh(SEQUENCE, REFERENCE, sink=_silent)
    assert [orf.codons for orf in result.orfs] == [(0, 16), (1, 19)]
    # Each frame: symbol of family A (2 divisions) then a pivot (6 divisions).
    assert result.vertex_count == 2 * (2 * 6 + 6 * 6)
    assert result.buffer.shape == (9 * result.vertex_count,)
    assert result.ranges == [(0, 48), (48, 48)]
    assert result.mismatch_count == 0


def test_process_is_deterministic() -> None:
    first = process(SEQUENCE, REFERENCE, sink=_silent)
    second = process(SEQUENCE, REFERENCE, sink=_silent)
    np.testing.assert_array_equal(first, second)


def test_matching_reference_has_no_alarm_colors() -> None:
    _, _, colors = unpack(process(SEQUENCE, REFERENCE, sink=_silent))
    assert not np.isclose(colors, ALARM).all(axis=1).any()


def test_mismatch_is_highlighted() -> None:
    result = build_mesh(MUTATED, REFERENCE, sink=_silent)
    assert result.diffs[0].signed() == [0, -17]
    assert result.mismatch_count == 1
    _, _, colors = unpack(result.buffer)
    first, count = result.ranges[0]
    lane = colors[first : first + count]
    # The last rail pair of the mismatching segment takes the alarm colour.
    np.testing.assert_allclose(lane[-1], ALARM)


def test_missing_reference_flags_whole_frame() -> None:
    result = build_mesh(SEQUENCE, "", sink=_silent)
    assert all(all(result.diffs[idx].mismatches) for idx in range(2))


def test_lanes_start_on_the_circle() -> None:
    result = build_mesh(SEQUENCE, REFERENCE, sink=_silent)
    positions, _, _ = unpack(result.buffer)
    first_lane0 = positions[result.ranges[0][0]]
    first_lane1 = positions[result.ranges[1][0]]
    np.testing.assert_allclose(first_lane0[:2], (2.0, 0.0), atol=0.06)
    np.testing.assert_allclose(first_lane1[:2], (-2.0, 0.0), atol=0.06)


def test_sink_receives_reference_then_sequence_lines() -> None:
    lines: list[str] = []
    process("atgtttgcttaa", "atgtaa" + "atgccctaa", sink=lines.append)
    assert lines == [
        "protein 0 - from 8 to 14",
        "parts count: 1",
        "protein 0 - from 2 to 11",
        "parts count: 1",
    ]
