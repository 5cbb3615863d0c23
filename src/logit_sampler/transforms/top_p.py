"""Top-p (nucleus) transform."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from logit_sampler.exceptions import InvalidParameterError
from logit_sampler.transforms.base import Transform

if TYPE_CHECKING:
    from logit_sampler.selection.types import TokenRecordSet


class TopP(Transform):
    """Keep the smallest probability-sorted prefix whose cumulative mass is >= ``p``.

    At least one record is always kept, even when the most probable record
    alone exceeds ``p``. If floating-point drift keeps the cumulative sum
    below ``p``, every record is kept. Survivor probabilities are
    renormalized to sum to 1.
    """

    name = "top_p"

    def __init__(self, p: float) -> None:
        """Initialize with the cumulative probability threshold.

        Args:
            p: Threshold in ``(0, 1)``.

        Raises:
            InvalidParameterError: If *p* is outside ``(0, 1)``.
        """
        if math.isnan(p) or not 0.0 < p < 1.0:
            raise InvalidParameterError(f"top_p must be in (0, 1), got {p}")
        self.p = float(p)

    def apply(self, tokens: TokenRecordSet) -> TokenRecordSet:
        ordered = tokens.sort_descending()
        if len(ordered) == 0:
            return ordered

        cumulative = np.cumsum(ordered.probs)
        reached = cumulative >= self.p
        # Include the token that crosses the threshold.
        cutoff = int(np.argmax(reached)) + 1 if np.any(reached) else len(ordered)
        return ordered.take(slice(0, cutoff)).renormalized()
