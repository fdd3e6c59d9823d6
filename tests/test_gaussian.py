"""Tests for the Box-Muller Gaussian sampler."""

from itertools import islice

import numpy as np
import pytest

from qam_blocks.gaussian import box_muller, standard_normal

NUM_DRAWS = 100_000
EXPECTED_HALF_CIRCLE = -np.sqrt(-2.0 * np.log(0.5))  # u = v = 0.5


class ScriptedRng:
    """Uniform source replaying fixed values, used to force exact zeros."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self, size=None):
        self.calls += 1
        if size is None:
            return self.values.pop(0)
        n = int(np.prod(size))
        return np.array([self.values.pop(0) for _ in range(n)]).reshape(size)


class TestBoxMullerStream:

    def test_is_lazy_and_infinite(self, rng):
        stream = box_muller(rng)
        first = list(islice(stream, 5))
        more = list(islice(stream, 5))
        assert len(first) == 5
        assert len(more) == 5
        assert all(isinstance(x, float) for x in first + more)

    def test_moments(self, rng):
        samples = np.fromiter(islice(box_muller(rng), NUM_DRAWS), dtype=float)
        assert np.all(np.isfinite(samples))
        assert abs(samples.mean()) < 0.02
        assert abs(samples.var() - 1.0) < 0.03

    def test_zero_uniform_is_redrawn(self):
        scripted = ScriptedRng([0.0, 0.5, 0.0, 0.5])
        sample = next(box_muller(scripted))
        assert sample == pytest.approx(EXPECTED_HALF_CIRCLE)
        assert scripted.calls == 4

    def test_seeded_streams_repeat(self):
        a = list(islice(box_muller(np.random.default_rng(7)), 20))
        b = list(islice(box_muller(np.random.default_rng(7)), 20))
        assert a == b


class TestStandardNormal:

    def test_shape(self, rng):
        assert standard_normal(rng, 10).shape == (10,)
        assert standard_normal(rng, (3, 4)).shape == (3, 4)

    def test_moments(self, rng):
        samples = standard_normal(rng, NUM_DRAWS)
        assert np.all(np.isfinite(samples))
        assert abs(samples.mean()) < 0.02
        assert abs(samples.var() - 1.0) < 0.03

    def test_zero_uniforms_are_redrawn(self):
        # u: two zeros re-drawn as 0.5, v: all 0.5
        scripted = ScriptedRng([0.0, 0.5, 0.0, 0.5, 0.5, 0.5, 0.5, 0.5])
        samples = standard_normal(scripted, 3)
        np.testing.assert_allclose(samples, EXPECTED_HALF_CIRCLE)
        assert not scripted.values
