import numpy as np
import pytest

from latticenoise.lattice import GRADIENTS, PermutationTable, gradient, wrap


def test_table_is_a_doubled_permutation():
    table = PermutationTable(seed=5)
    assert len(table) == 512
    first, second = table.p[:256], table.p[256:]
    assert np.array_equal(first, second)
    assert sorted(first.tolist()) == list(range(256))


def test_table_deterministic_for_seed():
    assert PermutationTable(seed=99) == PermutationTable(seed=99)
    assert PermutationTable(seed=1) != PermutationTable(seed=2)


def test_table_is_read_only():
    table = PermutationTable(seed=0)
    with pytest.raises(ValueError):
        table.p[0] = 1
    with pytest.raises(ValueError):
        GRADIENTS[0, 0] = 5.0


def test_hash_accepts_negative_and_large_coordinates():
    table = PermutationTable(seed=3)
    for xi, yi, zi in [(-1, -1, -1), (-300, 7, 1 << 40), (255, 256, 257),
                       (1 << 70, -(1 << 64), 1 << 63)]:
        h = int(table.hash(xi, yi, zi))
        assert 0 <= h < 256


def test_hash_masks_to_table_period():
    table = PermutationTable(seed=3)
    assert table.hash(3, 4, 5) == table.hash(3 + 256, 4 - 512, 5 + 1024)
    assert table.hash(3, 4, 5) == table.hash(3 + (1 << 70), 4, 5 - (1 << 66))


def test_hash_scalar_matches_array():
    table = PermutationTable(seed=11)
    xi = np.array([-3, 0, 17, 400])
    yi = np.array([2, -9, 0, 1])
    zi = np.array([5, 5, -128, 33])
    h = table.hash(xi, yi, zi)
    for k in range(4):
        assert h[k] == table.hash(int(xi[k]), int(yi[k]), int(zi[k]))


def test_wrap_reduces_into_period():
    assert wrap(7, 5) == 2
    assert wrap(-1, 5) == 4
    assert wrap(-5, 5) == 0
    assert wrap(-13, 0) == -13
    assert np.array_equal(wrap(np.array([-6, -1, 0, 4, 5, 11]), 5),
                          np.array([4, 4, 0, 4, 0, 1]))


def test_gradients_are_cube_edges():
    assert GRADIENTS.shape == (16, 3)
    assert np.all(np.abs(GRADIENTS).sum(axis=1) == 2)
    assert len({tuple(g) for g in GRADIENTS.tolist()}) == 12


def test_gradient_of_zero_offset_is_zero():
    for h in range(16):
        assert gradient(h, 0.0, 0.0, 0.0) == 0.0


def test_gradient_dot_product():
    # h = 4 selects (1, 0, 1)
    assert gradient(4, 0.25, 0.5, 0.125) == pytest.approx(0.375)
    # only the low four bits select the direction
    assert gradient(4 + 16 * 7, 0.25, 0.5, 0.125) == pytest.approx(0.375)


def test_corner_wraps_before_hashing():
    table = PermutationTable(seed=8)
    period = (5, 0, 3)
    a = table.corner(7, 2, -1, 0.3, 0.2, 0.1, period)
    b = table.corner(2, 2, 2, 0.3, 0.2, 0.1, None)
    assert a == b
