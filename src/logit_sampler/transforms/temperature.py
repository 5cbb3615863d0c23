"""Temperature transform.

Rescales logits by ``1 / t``. Lower temperatures sharpen the distribution
toward the arg-max, higher temperatures flatten it.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from logit_sampler.exceptions import InvalidParameterError
from logit_sampler.transforms.base import Transform

if TYPE_CHECKING:
    from logit_sampler.selection.types import TokenRecordSet

MAX_TEMPERATURE = 2.0


class Temperature(Transform):
    """Divide every logit by ``temperature`` and recompute probabilities.

    Logits are first shifted so the largest finite one is 0. Softmax is
    shift-invariant, and very small temperatures then push the other
    logits toward ``-inf`` instead of overflowing to ``+inf``.

    Zero temperature is not representable here: the builder turns it into
    a greedy sampler before any transform is constructed.
    """

    name = "temperature"

    def __init__(self, temperature: float) -> None:
        """Initialize with the scaling temperature.

        Args:
            temperature: Value in ``(0, 2]``.

        Raises:
            InvalidParameterError: If *temperature* is outside ``(0, 2]``.
        """
        if math.isnan(temperature) or not 0.0 < temperature <= MAX_TEMPERATURE:
            raise InvalidParameterError(
                f"temperature must be in (0, {MAX_TEMPERATURE}], got {temperature}"
            )
        self.temperature = float(temperature)

    def apply(self, tokens: TokenRecordSet) -> TokenRecordSet:
        logits = tokens.logits
        finite = logits[np.isfinite(logits)]
        # Shift so the largest finite logit is 0; dividing cannot overflow to +inf.
        shift = float(np.max(finite)) if finite.size else 0.0
        with np.errstate(over="ignore"):
            scaled = (logits - shift) / self.temperature
        # A positive scale preserves order, so the sorted flag stays valid.
        return tokens.with_logits(scaled)
