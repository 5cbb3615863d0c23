"""Diagnostic logger for per-token sampling events.

Uses the standard ``logging`` module with the ``"logit_sampler"`` logger.
No ``print()`` statements. Supports three verbosity levels and an
in-memory diagnostic mode for post-hoc analysis.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from logit_sampler.config import SamplerConfig
    from logit_sampler.logging.types import TokenSamplingRecord

logger = logging.getLogger("logit_sampler")


class SamplingLogger:
    """Per-token diagnostic logger.

    Log levels:
        ``"none"``: No logging output. Records are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One-line per token with key metrics (token_id,
        probability, surviving candidates, sampler, temperature).

        ``"full"``: Full JSON dump of all record fields.

    Diagnostic mode stores all records in memory for post-hoc statistical
    analysis via ``get_diagnostic_data()`` and ``get_summary_stats()``.
    """

    def __init__(self, config: SamplerConfig) -> None:
        """Initialize the logger from configuration.

        Args:
            config: Configuration providing ``log_level`` and ``diagnostic_mode``.
        """
        self._log_level = config.log_level
        self._diagnostic_mode = config.diagnostic_mode
        self._records: list[TokenSamplingRecord] = []

    def log_token(self, record: TokenSamplingRecord) -> None:
        """Log a single token sampling event.

        Args:
            record: Immutable record of the sampling call.
        """
        if self._diagnostic_mode:
            self._records.append(record)

        if self._log_level == "none":
            return

        if self._log_level == "summary":
            logger.info(
                "token=%d prob=%.4f candidates=%d sampler=%s%s temp=%.3f "
                "entropy=%.3f total=%.2fms",
                record.token_id,
                record.token_prob,
                record.num_candidates,
                record.sampler,
                " [SEEDED]" if record.seeded else "",
                record.temperature,
                record.shannon_entropy,
                record.total_sampling_ms,
            )
        elif self._log_level == "full":
            logger.info("sampling_record: %s", json.dumps(asdict(record), default=str))

    def get_diagnostic_data(self) -> list[TokenSamplingRecord]:
        """Return all stored records (requires ``diagnostic_mode=True``).

        Returns:
            List of all TokenSamplingRecord instances logged so far.
            Empty if diagnostic_mode is False.
        """
        return list(self._records)

    def get_summary_stats(self) -> dict[str, Any]:
        """Compute summary statistics over all stored records.

        Returns:
            Dictionary with aggregate stats, or empty dict if no records.
        """
        if not self._records:
            return {}

        probs = [r.token_prob for r in self._records]
        candidates = [r.num_candidates for r in self._records]
        entropies = [r.shannon_entropy for r in self._records]
        total_times = [r.total_sampling_ms for r in self._records]

        n = len(self._records)
        return {
            "total_tokens": n,
            "mean_prob": sum(probs) / n,
            "min_prob": min(probs),
            "mean_candidates": sum(candidates) / n,
            "mean_entropy": sum(entropies) / n,
            "mean_total_ms": sum(total_times) / n,
            "max_total_ms": max(total_times),
            "sampler_counts": dict(Counter(r.sampler for r in self._records)),
        }
