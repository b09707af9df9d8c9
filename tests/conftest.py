import numpy as np
import pytest

import latticenoise as ln


@pytest.fixture
def eng():
    return ln.newEngine(seed=42)


@pytest.fixture
def points():
    rng = np.random.default_rng(2024)
    return rng.uniform(-50.0, 50.0, size=(3, 500))
