"""Tests for the probability model."""

from __future__ import annotations

import math

import numpy as np
import pytest

from logit_sampler.probability import compute_shannon_entropy, stable_softmax


class TestStableSoftmax:
    """Tests for stable_softmax."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_sums_to_one_and_non_negative(self, seed: int) -> None:
        rng = np.random.default_rng(seed)
        logits = rng.normal(scale=10.0, size=1000)
        probs = stable_softmax(logits)
        assert abs(float(np.sum(probs)) - 1.0) < 1e-6
        assert np.all(probs >= 0.0)

    def test_known_values(self, scenario_logits: np.ndarray) -> None:
        """softmax([1, 2, 3, 0.5]) against hand-computed values."""
        probs = stable_softmax(scenario_logits)
        exps = [math.exp(x) for x in (1.0, 2.0, 3.0, 0.5)]
        expected = [e / sum(exps) for e in exps]
        np.testing.assert_allclose(probs, expected, atol=1e-9)
        np.testing.assert_allclose(probs, [0.0854, 0.2321, 0.6308, 0.0518], atol=1e-4)

    def test_three_token_reference(self) -> None:
        probs = stable_softmax(np.array([1.0, 2.0, 3.0]))
        np.testing.assert_allclose(probs, [0.0900, 0.2447, 0.6652], atol=1e-4)

    def test_large_logits_do_not_overflow(self) -> None:
        probs = stable_softmax(np.array([1000.0, 999.0, -1000.0]))
        assert np.all(np.isfinite(probs))
        assert abs(float(np.sum(probs)) - 1.0) < 1e-9
        assert probs[0] > probs[1] > probs[2]

    def test_shift_invariance(self) -> None:
        logits = np.array([0.5, -1.0, 2.0])
        np.testing.assert_allclose(stable_softmax(logits), stable_softmax(logits + 500.0))

    def test_masked_tokens_get_zero(self) -> None:
        probs = stable_softmax(np.array([-np.inf, 1.0, -np.inf, 1.0]))
        np.testing.assert_allclose(probs, [0.0, 0.5, 0.0, 0.5])

    def test_all_negative_infinity_is_all_zero(self) -> None:
        probs = stable_softmax(np.full(4, -np.inf))
        assert np.all(probs == 0.0)

    def test_nan_treated_as_masked(self) -> None:
        probs = stable_softmax(np.array([np.nan, 0.0]))
        np.testing.assert_allclose(probs, [0.0, 1.0])

    def test_positive_infinity_takes_all_mass(self) -> None:
        probs = stable_softmax(np.array([np.inf, 3.0, np.inf]))
        np.testing.assert_allclose(probs, [0.5, 0.0, 0.5])

    def test_empty(self) -> None:
        assert stable_softmax(np.array([])).size == 0

    def test_does_not_modify_input(self) -> None:
        logits = np.array([np.nan, 1.0])
        stable_softmax(logits)
        assert np.isnan(logits[0])


class TestComputeShannonEntropy:
    """Tests for compute_shannon_entropy."""

    def test_uniform_distribution(self) -> None:
        n = 8
        h = compute_shannon_entropy(np.full(n, 1.0 / n))
        assert abs(h - math.log(n)) < 1e-9

    def test_point_mass(self) -> None:
        assert compute_shannon_entropy(np.array([1.0, 0.0, 0.0])) == 0.0

    def test_two_equal_tokens(self) -> None:
        h = compute_shannon_entropy(np.array([0.5, 0.5]))
        assert abs(h - math.log(2)) < 1e-9

    def test_all_zero(self) -> None:
        assert compute_shannon_entropy(np.zeros(3)) == 0.0
