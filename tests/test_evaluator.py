import numpy as np
import pytest

from latticenoise.config import OctaveSpec, RepeatPeriod
from latticenoise.evaluator import NoiseEvaluator, fade, lerp, normalize
from latticenoise.lattice import PermutationTable


@pytest.fixture
def ev():
    return NoiseEvaluator(PermutationTable(seed=17))


def test_fade_endpoints_and_midpoint():
    assert fade(0.0) == 0.0
    assert fade(1.0) == 1.0
    assert fade(0.5) == 0.5


def test_fade_flat_at_ends():
    h = 1e-4
    assert fade(h) < 1e-10
    assert 1.0 - fade(1.0 - h) < 1e-10


def test_fade_monotonic():
    t = np.linspace(0.0, 1.0, 201)
    assert np.all(np.diff(fade(t)) >= 0.0)


def test_lerp_and_normalize():
    assert lerp(2.0, 6.0, 0.0) == 2.0
    assert lerp(2.0, 6.0, 1.0) == 6.0
    assert lerp(2.0, 6.0, 0.25) == 3.0
    assert normalize(-1.0) == 0.0
    assert normalize(0.0) == 0.5
    assert normalize(1.0) == 1.0


def test_scalar_input_returns_float(ev):
    assert isinstance(ev.raw(0.3, 0.4, 0.5), float)
    assert isinstance(ev.evaluate(0.3, 0.4, 0.5), float)


def test_array_input_returns_matching_shape(ev):
    x = np.linspace(0.0, 4.0, 12).reshape(3, 4)
    out = ev.evaluate(x, 0.5, -2.25)
    assert isinstance(out, np.ndarray)
    assert out.shape == (3, 4)


def test_array_matches_scalar_bitwise(ev, points):
    x, y, z = points
    spec = OctaveSpec(4, 0.6)
    rep = RepeatPeriod(7, 0, 3)
    out = ev.evaluate(x, y, z, rep, spec)
    for k in range(0, x.size, 25):
        assert out[k] == ev.evaluate(float(x[k]), float(y[k]), float(z[k]),
                                     rep, spec)


def test_raw_range(ev, points):
    out = ev.raw(*points)
    assert np.all(out >= -1.0)
    assert np.all(out <= 1.0)
    assert np.ptp(out) > 0.1


def test_lattice_points_are_midpoint(ev):
    for c in [(0, 0, 0), (1, 2, 3), (-4, 9, -17), (255, 256, -257)]:
        assert ev.raw(*c) == 0.0
        assert ev.evaluate(*c) == 0.5


def test_continuous_across_cell_boundary(ev):
    eps = 1e-7
    for b in (1.0, -3.0, 12.0):
        left = ev.raw(b - eps, 0.37, 0.81)
        right = ev.raw(b + eps, 0.37, 0.81)
        assert abs(left - right) < 1e-5


def test_fractal_single_octave_is_raw(ev, points):
    x, y, z = points
    assert np.array_equal(ev.fractal(x, y, z, octaves=OctaveSpec(1, 0.3)),
                          ev.raw(x, y, z))


def test_fractal_is_amplitude_weighted_mean(ev):
    x, y, z = 0.3, 1.7, -2.2
    spec = OctaveSpec(3, 0.5)
    expected = (ev.raw(x, y, z)
                + 0.5 * ev.raw(2 * x, 2 * y, 2 * z)
                + 0.25 * ev.raw(4 * x, 4 * y, 4 * z)) / 1.75
    assert ev.fractal(x, y, z, octaves=spec) == pytest.approx(expected)


def test_repeat_applies_per_axis(ev):
    rep = RepeatPeriod(0, 4, 0)
    assert ev.raw(0.5, 0.25, 0.75, rep) == ev.raw(0.5, 4.25, 0.75, rep)
    assert ev.raw(0.5, 0.25, 0.75, rep) == ev.raw(0.5, -3.75, 0.75, rep)
