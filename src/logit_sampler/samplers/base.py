"""Abstract base class for terminal samplers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np

    from logit_sampler.selection.types import SelectionResult


class Sampler(ABC):
    """Picks one token id from a logit vector.

    ``select()`` runs the whole strategy and reports diagnostics;
    ``sample()`` is the plain entry point returning only the id. Each call
    is atomic: it either returns a token id or raises, with no partial
    state left behind.
    """

    name: str = ""

    @abstractmethod
    def select(self, logits: np.ndarray) -> SelectionResult:
        """Select one token and describe how it was chosen.

        Args:
            logits: 1-D float64 logit array indexed by vocabulary id.

        Returns:
            SelectionResult with the selected token and diagnostics.

        Raises:
            NoValidTokenError: If no admissible token exists.
            SamplingFailureError: If the random draw cannot select a token.
        """

    def sample(self, logits: np.ndarray) -> int:
        """Return the selected token id for *logits*."""
        return self.select(logits).token_id
