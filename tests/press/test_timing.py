"""
Unit tests for stage timing.
"""

import pytest

from gazette_press.press.timing import StageTimings, timed_stage


def test_records_stage_duration():
    timings = StageTimings()
    with timed_stage(timings, "place"):
        pass
    assert "place" in timings.stages
    assert timings.stages["place"] >= 0.0


def test_records_even_when_stage_raises():
    timings = StageTimings()
    with pytest.raises(RuntimeError):
        with timed_stage(timings, "compose"):
            raise RuntimeError("boom")
    assert "compose" in timings.stages


def test_repeated_stage_accumulates():
    timings = StageTimings()
    timings.record("fetch", 0.5)
    timings.record("fetch", 0.25)
    assert timings.stages["fetch"] == pytest.approx(0.75)


def test_summary_and_slowest():
    timings = StageTimings()
    timings.record("validate", 0.001)
    timings.record("optimize", 1.5)

    assert timings.slowest() == ("optimize", 1.5)
    assert timings.total == pytest.approx(1.501)
    summary = timings.summary()
    assert "optimize" in summary and "total" in summary
    assert list(timings.stages) == ["validate", "optimize"]


def test_empty_timings():
    assert StageTimings().slowest() == ("", 0.0)
