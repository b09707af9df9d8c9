import dataclasses

import numpy as np
import pytest

from latticenoise.config import (InvalidArgument, OctaveSpec, RepeatPeriod,
                                 SampleRequest, checkCount, checkFinite,
                                 checkPositiveInt)


def test_repeat_forms():
    assert RepeatPeriod.of(None) == RepeatPeriod(0, 0, 0)
    assert RepeatPeriod.of(0) == RepeatPeriod(0, 0, 0)
    assert RepeatPeriod.of(6) == RepeatPeriod(6, 6, 6)
    assert RepeatPeriod.of([2, 0, 9]) == RepeatPeriod(2, 0, 9)
    assert RepeatPeriod.of(np.array([1, 2, 3])) == RepeatPeriod(1, 2, 3)
    rep = RepeatPeriod(4, 4, 0)
    assert RepeatPeriod.of(rep) is rep


def test_repeat_active():
    assert not RepeatPeriod().active
    assert RepeatPeriod(0, 0, 3).active
    assert RepeatPeriod.of(np.int64(5)).astuple() == (5, 5, 5)


@pytest.mark.parametrize("value", [-1, (1, 2), (1, 2, 3, 4), "abc", 3.0,
                                   (1, -1, 1), True])
def test_repeat_rejects(value):
    with pytest.raises(InvalidArgument):
        RepeatPeriod.of(value)


def test_octave_amplitudes():
    assert OctaveSpec().amplitudes == (1.0,)
    assert OctaveSpec(4, 0.5).amplitudes == (1.0, 0.5, 0.25, 0.125)
    assert OctaveSpec(3, 1.0).amplitudes == (1.0, 1.0, 1.0)


@pytest.mark.parametrize("octaves,persistence", [
    (0, 0.5), (-1, 0.5), (1.0, 0.5), (2, 0), (2, -1.0), (2, float("inf")),
    (2, "0.5"),
])
def test_octave_rejects(octaves, persistence):
    with pytest.raises(InvalidArgument):
        OctaveSpec(octaves, persistence)


def test_records_are_frozen():
    spec = OctaveSpec(2, 0.5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        spec.octaves = 3


def test_sample_request_normalizes_fields():
    req = SampleRequest(start=[1, 2, 3], delta=np.array([0.5, 0.0, -1.0]),
                        count=np.int32(4), repeat=5)
    assert req.start == (1.0, 2.0, 3.0)
    assert req.delta == (0.5, 0.0, -1.0)
    assert req.count == 4 and isinstance(req.count, int)
    assert req.repeat == RepeatPeriod(5, 5, 5)
    assert req.octaves == OctaveSpec()


@pytest.mark.parametrize("kwargs", [
    {"start": (0, 0), "delta": (1, 1, 1), "count": 1},
    {"start": (0, 0, 0), "delta": (1, "a", 1), "count": 1},
    {"start": (0, float("nan"), 0), "delta": (1, 1, 1), "count": 1},
    {"start": (0, 0, 0), "delta": (1, float("-inf"), 1), "count": 1},
    {"start": (0, 0, 0), "delta": (1, 1, 1), "count": -1},
    {"start": (0, 0, 0), "delta": (1, 1, 1), "count": 1, "octaves": 3},
])
def test_sample_request_rejects(kwargs):
    with pytest.raises(InvalidArgument):
        SampleRequest(**kwargs)


def test_checks():
    assert checkCount(0) == 0
    assert checkPositiveInt(np.int16(3), 'n') == 3
    with pytest.raises(InvalidArgument):
        checkCount(False)
    with pytest.raises(InvalidArgument):
        checkPositiveInt(0, 'n')


def test_check_finite():
    checkFinite(1e300, -1e300, np.array([0.0, 5.5]))
    for bad in (float("nan"), float("inf"), np.array([0.0, -np.inf])):
        with pytest.raises(InvalidArgument):
            checkFinite(0.0, bad, 0.0)
