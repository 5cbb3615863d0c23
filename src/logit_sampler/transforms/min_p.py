"""Min-p transform: drop candidates far less likely than the best one."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from logit_sampler.exceptions import InvalidParameterError
from logit_sampler.transforms.base import Transform

if TYPE_CHECKING:
    from logit_sampler.selection.types import TokenRecordSet


class MinP(Transform):
    """Keep records whose probability is at least ``m`` times the maximum.

    Order-independent. The input order and its ``sorted`` flag are kept, so
    the most probable record always survives. Survivor probabilities are
    renormalized to sum to 1.
    """

    name = "min_p"

    def __init__(self, m: float) -> None:
        """Initialize with the relative probability floor.

        Args:
            m: Fraction of the maximum probability, in ``(0, 1)``.

        Raises:
            InvalidParameterError: If *m* is outside ``(0, 1)``.
        """
        if math.isnan(m) or not 0.0 < m < 1.0:
            raise InvalidParameterError(f"min_p must be in (0, 1), got {m}")
        self.m = float(m)

    def apply(self, tokens: TokenRecordSet) -> TokenRecordSet:
        if len(tokens) == 0:
            return tokens
        threshold = self.m * tokens.max_prob
        return tokens.take(tokens.probs >= threshold).renormalized()
