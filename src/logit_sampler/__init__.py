"""logit-sampler: pick the next token from a vector of model logits.

Softmax, a fixed-order transform pipeline (temperature, top-k, top-p,
min-p) and greedy or seeded weighted selection, with layered configuration
and per-token diagnostic logging.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("logit-sampler")
except PackageNotFoundError:
    __version__ = "0.0.0"

from logit_sampler.config import SamplerConfig, resolve_config, validate_options
from logit_sampler.engine import RequestState, SamplingEngine
from logit_sampler.exceptions import (
    InvalidConfigurationError,
    InvalidParameterError,
    NoValidTokenError,
    SamplerError,
    SamplingFailureError,
)
from logit_sampler.samplers import (
    GreedySampler,
    Sampler,
    WeightedSampler,
    build_sampler,
    new_sampler,
)

__all__ = [
    "GreedySampler",
    "InvalidConfigurationError",
    "InvalidParameterError",
    "NoValidTokenError",
    "RequestState",
    "Sampler",
    "SamplerConfig",
    "SamplerError",
    "SamplingEngine",
    "SamplingFailureError",
    "WeightedSampler",
    "__version__",
    "build_sampler",
    "new_sampler",
    "resolve_config",
    "validate_options",
]
