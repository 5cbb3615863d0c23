"""Sampler construction and parameter validation.

``new_sampler()`` validates caller parameters in a fixed order (first
violation wins) and assembles a transform pipeline plus terminal strategy:

    temperature == 0          -> GreedySampler
    otherwise                 -> WeightedSampler(Temperature, TopK, TopP, MinP)

An optional parameter counts as unset when it is ``None`` or ``0``.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from logit_sampler.exceptions import InvalidConfigurationError, InvalidParameterError
from logit_sampler.samplers.greedy import GreedySampler
from logit_sampler.samplers.weighted import WeightedSampler
from logit_sampler.transforms.min_p import MinP
from logit_sampler.transforms.temperature import MAX_TEMPERATURE, Temperature
from logit_sampler.transforms.top_k import TopK
from logit_sampler.transforms.top_p import TopP

if TYPE_CHECKING:
    from logit_sampler.config import SamplerConfig
    from logit_sampler.samplers.base import Sampler
    from logit_sampler.transforms.base import Transform

logger = logging.getLogger("logit_sampler")

# Temperature 1.0 leaves logits unchanged, so it does not count as a stage.
_NEUTRAL_TEMPERATURE = 1.0


def _is_set(value: float | None) -> bool:
    return value is not None and value != 0


def _is_positive_int(value: float) -> bool:
    if isinstance(value, bool):
        return False
    return float(value).is_integer() and value > 0


def _check_unit_interval(name: str, value: float | None) -> None:
    """Reject a set value outside ``[0, 1)``."""
    if _is_set(value) and (math.isnan(value) or not 0.0 <= value < 1.0):  # type: ignore[arg-type]
        raise InvalidParameterError(f"{name} must be in [0, 1), got {value}")


def validate_parameters(
    temperature: float,
    top_k: int | None = None,
    top_p: float | None = None,
    min_p: float | None = None,
) -> None:
    """Validate sampling parameters without building a sampler.

    Args:
        temperature: Value in ``[0, 2]``.
        top_k: Positive integer, or unset.
        top_p: Value in ``[0, 1)``, or unset.
        min_p: Value in ``[0, 1)``, or unset.

    Raises:
        InvalidParameterError: For the first parameter out of range.
    """
    if temperature is None or math.isnan(temperature) or not 0.0 <= temperature <= MAX_TEMPERATURE:
        raise InvalidParameterError(
            f"temperature must be between 0 and {MAX_TEMPERATURE}, got {temperature}"
        )
    if _is_set(top_k) and not _is_positive_int(top_k):
        raise InvalidParameterError(f"top_k must be a positive integer, got {top_k}")
    _check_unit_interval("top_p", top_p)
    _check_unit_interval("min_p", min_p)


def new_sampler(
    temperature: float,
    top_k: int | None = None,
    top_p: float | None = None,
    min_p: float | None = None,
    seed: int | None = None,
) -> Sampler:
    """Validate parameters and build the matching sampler.

    Args:
        temperature: Value in ``[0, 2]``. ``0`` forces greedy sampling and
            overrides every other setting.
        top_k: Keep the k most probable tokens (unset: ``None`` or ``0``).
        top_p: Nucleus threshold in ``[0, 1)`` (unset: ``None`` or ``0``).
        min_p: Relative probability floor in ``[0, 1)`` (unset: ``None`` or ``0``).
        seed: Seed for reproducible weighted draws; ``None`` uses OS entropy.

    Returns:
        A GreedySampler or a freshly seeded WeightedSampler.

    Raises:
        InvalidParameterError: If any parameter is out of range.
        InvalidConfigurationError: If no transform would be active.
    """
    validate_parameters(temperature, top_k, top_p, min_p)

    if temperature == 0:
        return GreedySampler()

    transforms: list[Transform] = []
    if temperature != _NEUTRAL_TEMPERATURE:
        transforms.append(Temperature(temperature))
    if _is_set(top_k):
        transforms.append(TopK(top_k))  # type: ignore[arg-type]
    if _is_set(top_p):
        transforms.append(TopP(top_p))  # type: ignore[arg-type]
    if _is_set(min_p):
        transforms.append(MinP(min_p))  # type: ignore[arg-type]

    if not transforms:
        raise InvalidConfigurationError("at least one transform is required")

    sampler = WeightedSampler(transforms, seed=seed)
    logger.debug("Built %r", sampler)
    return sampler


def build_sampler(config: SamplerConfig) -> Sampler:
    """Build a sampler from a resolved SamplerConfig.

    Args:
        config: Configuration providing the sampling fields.

    Returns:
        The sampler described by *config*.
    """
    return new_sampler(
        temperature=config.temperature,
        top_k=config.top_k,
        top_p=config.top_p,
        min_p=config.min_p,
        seed=config.seed,
    )
