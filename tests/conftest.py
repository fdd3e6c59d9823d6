import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

RNG_SEED = 2024


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so statistical assertions are reproducible."""
    return np.random.default_rng(RNG_SEED)
