"""Data types for the token selection subsystem."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import numpy as np

from logit_sampler.probability import stable_softmax


@dataclass(frozen=True, slots=True)
class TokenRecord:
    """One candidate token.

    Attributes:
        id: Vocabulary index, unique within a record set.
        logit: Current logit (shifted and scaled by Temperature).
        probability: Probability of the token within its record set.
    """

    id: int
    logit: float
    probability: float


@dataclass(frozen=True, slots=True)
class TokenRecordSet:
    """Working set of candidate tokens threaded through the transform pipeline.

    Stored as parallel arrays. Each transform returns a new set; the arrays
    of a set are never mutated after construction. Ids are unique and a
    set only ever shrinks as it passes through the pipeline.

    When ``sorted`` is True the records are ordered by descending
    probability, ties broken by ascending id.

    Attributes:
        ids: Vocabulary indices (int64).
        logits: Logits (float64), aligned with ``ids``.
        probs: Probabilities (float64), aligned with ``ids``.
        sorted: Whether the order above currently holds.
    """

    ids: np.ndarray
    logits: np.ndarray
    probs: np.ndarray
    sorted: bool = False

    @classmethod
    def from_logits(cls, logits: np.ndarray) -> TokenRecordSet:
        """Build the full, unsorted record set for a logit vector.

        Args:
            logits: 1-D float64 logit array indexed by vocabulary id.

        Returns:
            A set holding one record per vocabulary id, with softmax
            probabilities.
        """
        values = np.asarray(logits, dtype=np.float64)
        return cls(
            ids=np.arange(values.size, dtype=np.int64),
            logits=values,
            probs=stable_softmax(values),
            sorted=False,
        )

    def __len__(self) -> int:
        return int(self.ids.size)

    def take(self, index: np.ndarray | slice, *, sorted: bool | None = None) -> TokenRecordSet:
        """Return the subset (or reordering) selected by *index*.

        Args:
            index: Integer positions, boolean mask or slice into this set.
            sorted: Value of the ``sorted`` flag on the result. Defaults to
                this set's flag, which is correct for order-preserving masks.

        Returns:
            A new set. Probabilities are copied, not renormalized.
        """
        return TokenRecordSet(
            ids=self.ids[index],
            logits=self.logits[index],
            probs=self.probs[index],
            sorted=self.sorted if sorted is None else sorted,
        )

    def sort_descending(self) -> TokenRecordSet:
        """Return the set ordered by descending probability (ties: lower id first).

        Returns this set unchanged if it is already sorted.
        """
        if self.sorted:
            return self
        # lexsort sorts by the last key first.
        order = np.lexsort((self.ids, -self.probs))
        return self.take(order, sorted=True)

    def with_logits(self, logits: np.ndarray) -> TokenRecordSet:
        """Return a set with replaced logits and freshly computed probabilities."""
        return TokenRecordSet(
            ids=self.ids,
            logits=logits,
            probs=stable_softmax(logits),
            sorted=self.sorted,
        )

    def renormalized(self) -> TokenRecordSet:
        """Return the set with probabilities rescaled to sum to 1.

        A set whose probabilities sum to zero is returned unchanged.
        """
        total = float(np.sum(self.probs))
        if total <= 0.0 or total == 1.0:
            return self
        return TokenRecordSet(
            ids=self.ids,
            logits=self.logits,
            probs=self.probs / total,
            sorted=self.sorted,
        )

    @property
    def max_prob(self) -> float:
        """Largest probability in the set (0.0 for an empty set)."""
        if self.ids.size == 0:
            return 0.0
        return float(np.max(self.probs))

    def records(self) -> Iterator[TokenRecord]:
        """Iterate over the set as TokenRecord objects, in current order."""
        for token_id, logit, prob in zip(self.ids, self.logits, self.probs):
            yield TokenRecord(id=int(token_id), logit=float(logit), probability=float(prob))


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """Result of sampling one token.

    Attributes:
        token_id: Vocabulary index of the selected token.
        token_prob: Probability of the selected token after filtering.
        num_candidates: Number of tokens that survived the pipeline.
        diagnostics: Additional info (sampler kind, entropy, draw value).
    """

    token_id: int
    token_prob: float
    num_candidates: int
    diagnostics: dict[str, Any]
