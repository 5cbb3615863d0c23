"""Shared pytest fixtures for logit-sampler tests.

Provides reusable configuration objects and sample logit arrays that are
used across multiple test modules.
"""

from __future__ import annotations

import numpy as np
import pytest

from logit_sampler.config import SamplerConfig


@pytest.fixture
def default_config() -> SamplerConfig:
    """Return a SamplerConfig with all default values (no .env file)."""
    return SamplerConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def silent_config() -> SamplerConfig:
    """Return a config with no logging for noise-free tests."""
    return SamplerConfig(_env_file=None, log_level="none")  # type: ignore[call-arg]


@pytest.fixture
def diagnostic_config() -> SamplerConfig:
    """Return a config with diagnostic mode and full logging enabled."""
    return SamplerConfig(
        _env_file=None,  # type: ignore[call-arg]
        log_level="full",
        diagnostic_mode=True,
    )


@pytest.fixture
def scenario_logits() -> np.ndarray:
    """Four logits whose arg-max is token 2."""
    return np.array([1.0, 2.0, 3.0, 0.5])


@pytest.fixture
def skewed_logits() -> np.ndarray:
    """Logits whose softmax is exactly [0.3, 0.25, 0.2, 0.15, 0.1]."""
    return np.log(np.array([0.3, 0.25, 0.2, 0.15, 0.1]))


@pytest.fixture
def sample_logits_uniform() -> np.ndarray:
    """All logits equal: softmax gives 1/100 to every token."""
    return np.zeros(100, dtype=np.float64)


@pytest.fixture
def sample_logits_peaked() -> np.ndarray:
    """Token 0 has logit 10.0, all others 0.0 (~99.5% mass on token 0 of 100)."""
    logits = np.zeros(100, dtype=np.float64)
    logits[0] = 10.0
    return logits


@pytest.fixture
def sample_logits_large_vocab() -> np.ndarray:
    """Random logits for a realistic vocabulary size (32000), fixed seed."""
    rng = np.random.default_rng(seed=12345)
    return rng.standard_normal(32000).astype(np.float64)
