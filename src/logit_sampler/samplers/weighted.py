"""Weighted random sampler.

Runs the transform pipeline, then draws one surviving token with
probability proportional to its weight:

    uniform u in [0, 1) -> CDF of surviving weights -> binary search

One uniform value is consumed per successful draw, so a seeded sampler
reproduces the same token sequence for the same sequence of calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from logit_sampler.exceptions import NoValidTokenError, SamplingFailureError
from logit_sampler.probability import compute_shannon_entropy
from logit_sampler.samplers.base import Sampler
from logit_sampler.selection.types import SelectionResult, TokenRecordSet
from logit_sampler.transforms.base import Pipeline

if TYPE_CHECKING:
    from collections.abc import Iterable

    from logit_sampler.transforms.base import Transform

_SEED_MODULUS = 1 << 64


class WeightedSampler(Sampler):
    """Pipeline-filtered, probability-weighted random choice.

    Each instance owns its own ``numpy.random.Generator``. A single
    instance must not be used from several threads at once without
    external locking; build one sampler per generation stream instead.
    """

    name = "weighted"

    def __init__(self, transforms: Iterable[Transform] = (), seed: int | None = None) -> None:
        """Initialize with a pipeline and an optional seed.

        Args:
            transforms: Stages to apply, in order.
            seed: 64-bit seed for reproducible draws. Values outside
                ``[0, 2**64)`` are reduced modulo ``2**64``. ``None`` seeds
                from OS entropy.
        """
        self._pipeline = transforms if isinstance(transforms, Pipeline) else Pipeline(transforms)
        self._seed = None if seed is None else int(seed) % _SEED_MODULUS
        self._rng = np.random.default_rng(self._seed)

    @property
    def pipeline(self) -> Pipeline:
        """The transform pipeline applied before each draw."""
        return self._pipeline

    @property
    def seeded(self) -> bool:
        """Whether draws are reproducible."""
        return self._seed is not None

    def filter(self, logits: np.ndarray) -> TokenRecordSet:
        """Run the probability model and the pipeline without drawing.

        Args:
            logits: 1-D float64 logit array.

        Returns:
            The surviving candidate set.
        """
        return self._pipeline.apply(TokenRecordSet.from_logits(logits))

    def select(self, logits: np.ndarray) -> SelectionResult:
        tokens = self.filter(logits)
        # No positive probability means every logit was -inf or NaN.
        if len(tokens) == 0 or tokens.max_prob <= 0.0:
            raise NoValidTokenError("no valid logits found for weighted sampling")

        position, u = self._draw(tokens.probs)
        total = float(np.sum(tokens.probs))
        return SelectionResult(
            token_id=int(tokens.ids[position]),
            token_prob=float(tokens.probs[position]) / total,
            num_candidates=len(tokens),
            diagnostics={
                "sampler": self.name,
                "transforms": self._pipeline.names,
                "shannon_entropy": compute_shannon_entropy(tokens.probs / total),
                "u": u,
            },
        )

    def _draw(self, weights: np.ndarray) -> tuple[int, float]:
        """Pick a position with probability proportional to *weights*.

        Args:
            weights: Non-negative weights; need not sum to 1.

        Returns:
            Tuple of (position in *weights*, uniform value used).

        Raises:
            SamplingFailureError: If the weights are not finite or sum to zero.
        """
        if not np.all(np.isfinite(weights)):
            raise SamplingFailureError("weighted sampler failed: non-finite weights")
        positive = np.flatnonzero(weights > 0)
        if positive.size == 0:
            raise SamplingFailureError("weighted sampler failed, no valid token found")

        cdf = np.cumsum(weights)
        u = float(self._rng.random())
        # side="right" never lands on a zero-weight entry.
        position = int(np.searchsorted(cdf, u * cdf[-1], side="right"))
        # Rounding can push the target onto the last CDF value.
        position = min(position, int(positive[-1]))
        return position, u

    def __repr__(self) -> str:
        return f"WeightedSampler(pipeline={self._pipeline!r}, seeded={self.seeded})"
