"""Terminal sampler subsystem for logit-sampler.

Greedy arg-max selection and pipeline-filtered weighted random selection,
plus the builder that validates parameters and picks between them.
"""

from logit_sampler.samplers.base import Sampler
from logit_sampler.samplers.builder import build_sampler, new_sampler, validate_parameters
from logit_sampler.samplers.greedy import GreedySampler
from logit_sampler.samplers.weighted import WeightedSampler

__all__ = [
    "GreedySampler",
    "Sampler",
    "WeightedSampler",
    "build_sampler",
    "new_sampler",
    "validate_parameters",
]
