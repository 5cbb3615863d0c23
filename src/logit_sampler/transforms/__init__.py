"""Transform pipeline subsystem for logit-sampler.

Stages are applied in the fixed order Temperature -> TopK -> TopP -> MinP,
skipping any stage whose parameter is unset.
"""

from logit_sampler.transforms.base import Pipeline, Transform
from logit_sampler.transforms.min_p import MinP
from logit_sampler.transforms.temperature import MAX_TEMPERATURE, Temperature
from logit_sampler.transforms.top_k import TopK
from logit_sampler.transforms.top_p import TopP

__all__ = [
    "MAX_TEMPERATURE",
    "MinP",
    "Pipeline",
    "Temperature",
    "TopK",
    "TopP",
    "Transform",
]
