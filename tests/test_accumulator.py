"""Test clip-aware pixel accumulation.

Run:
    pytest tests/test_accumulator.py -v
"""

from src.coverage_oracle.accumulator import CoverageAccumulator
from src.coverage_oracle.geometry import ClipRect


def test_unbounded_keeps_everything():
    acc = CoverageAccumulator()
    assert acc.add(-1000, 1000)
    assert (-1000, 1000) in acc
    assert acc.rejected_count == 0


def test_clip_is_inclusive():
    acc = CoverageAccumulator(ClipRect(0, 0, 3, 2))
    assert acc.add(0, 0)
    assert acc.add(2, 1)
    assert not acc.add(3, 1)
    assert not acc.add(2, 2)
    assert not acc.add(-1, 0)
    assert acc.rejected_count == 3
    assert acc.result() == {(0, 0), (2, 1)}


def test_duplicates_collapse():
    acc = CoverageAccumulator()
    acc.add_all([(1, 1), (1, 1), (2, 1)])
    assert len(acc) == 2


def test_empty_clip_rejects_all():
    acc = CoverageAccumulator(ClipRect(5, 5, 0, 3))
    acc.add_all([(5, 5), (5, 6)])
    assert len(acc) == 0


def test_result_is_a_copy():
    acc = CoverageAccumulator()
    acc.add(1, 2)
    result = acc.result()
    result.add((9, 9))
    assert (9, 9) not in acc
