"""Diagnostic logging subsystem for logit-sampler.

Provides immutable per-token sampling records and a configurable logger
that supports none/summary/full verbosity and in-memory diagnostic mode.
"""

from logit_sampler.logging.logger import SamplingLogger
from logit_sampler.logging.types import TokenSamplingRecord

__all__ = [
    "SamplingLogger",
    "TokenSamplingRecord",
]
