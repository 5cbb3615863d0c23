"""Greedy (arg-max) sampler."""

from __future__ import annotations

import numpy as np

from logit_sampler.exceptions import NoValidTokenError
from logit_sampler.samplers.base import Sampler
from logit_sampler.selection.types import SelectionResult


class GreedySampler(Sampler):
    """Return the index of the largest raw logit.

    Transforms are never applied. Ties resolve to the lowest index and NaN
    logits never win. Stateless, so one instance is safe to share.
    """

    name = "greedy"

    def select(self, logits: np.ndarray) -> SelectionResult:
        values = np.asarray(logits, dtype=np.float64)
        if values.size == 0:
            raise NoValidTokenError("no valid logits found for greedy sampling")

        values = np.where(np.isnan(values), -np.inf, values)
        max_idx = int(np.argmax(values))
        if values[max_idx] == -np.inf:
            raise NoValidTokenError("no valid logits found for greedy sampling")

        return SelectionResult(
            token_id=max_idx,
            token_prob=1.0,
            num_candidates=1,
            diagnostics={"sampler": self.name},
        )

    def __repr__(self) -> str:
        return "GreedySampler()"
