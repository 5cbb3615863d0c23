"""Top-k transform: keep the k most probable candidates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from logit_sampler.exceptions import InvalidParameterError
from logit_sampler.transforms.base import Transform

if TYPE_CHECKING:
    from logit_sampler.selection.types import TokenRecordSet


class TopK(Transform):
    """Sort descending by probability and keep the first ``k`` records.

    Ties are broken by ascending token id. A set with at most ``k`` records
    keeps all of them. The result is always marked sorted, and survivor
    probabilities are renormalized to sum to 1.
    """

    name = "top_k"

    def __init__(self, k: int) -> None:
        """Initialize with the number of candidates to keep.

        Args:
            k: Positive number of records to keep.

        Raises:
            InvalidParameterError: If *k* is not a positive integer.
        """
        if isinstance(k, bool) or not float(k).is_integer() or k <= 0:
            raise InvalidParameterError(f"top_k must be a positive integer, got {k}")
        self.k = int(k)

    def apply(self, tokens: TokenRecordSet) -> TokenRecordSet:
        ordered = tokens.sort_descending()
        if len(ordered) <= self.k:
            return ordered
        return ordered.take(slice(0, self.k)).renormalized()
