"""Data types for the diagnostic logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TokenSamplingRecord:
    """Immutable record of a single token sampling event.

    Attributes:
        timestamp_ns: Monotonic time at the start of sampling (nanoseconds).
        total_sampling_ms: Time for the full sampling call (milliseconds).
        sampler: Terminal sampler used (``'greedy'`` or ``'weighted'``).
        transforms: Names of the pipeline stages applied, in order.
        temperature: Configured temperature.
        seeded: True if the sampler draws from a fixed seed.
        shannon_entropy: Entropy of the surviving distribution (nats).
        token_id: Vocabulary index of the selected token.
        token_prob: Probability of the selected token after filtering.
        num_candidates: Number of tokens surviving filtering.
        config_hash: 16-char SHA-256 prefix of the active config.
    """

    # Timing
    timestamp_ns: int
    total_sampling_ms: float

    # Strategy
    sampler: str
    transforms: tuple[str, ...]
    temperature: float
    seeded: bool

    # Selection
    shannon_entropy: float
    token_id: int
    token_prob: float
    num_candidates: int

    # Config snapshot
    config_hash: str
