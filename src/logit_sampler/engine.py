"""In-process entry point for logit-sampler.

Orchestrates one sampling call end to end:
    caller logits -> LogitVector -> sampler (pipeline + draw) -> token id -> log record.

Each generation request gets its own RequestState (resolved config and a
freshly built sampler with its own RNG). Requests share no mutable state,
so independent requests may be sampled from different threads; a single
request must be sampled from one thread at a time.
"""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from typing import TYPE_CHECKING, Any

import numpy as np

from logit_sampler.config import SamplerConfig, resolve_config, validate_options
from logit_sampler.logging.logger import SamplingLogger
from logit_sampler.logging.types import TokenSamplingRecord
from logit_sampler.samplers.builder import build_sampler

if TYPE_CHECKING:
    from logit_sampler.samplers.base import Sampler
    from logit_sampler.selection.types import SelectionResult

logger = logging.getLogger("logit_sampler")


def _config_hash(config: SamplerConfig) -> str:
    """Compute a short hash of the config for logging.

    Args:
        config: The sampler configuration to hash.

    Returns:
        First 16 hex characters of the SHA-256 digest of the config dump.
    """
    raw = config.model_dump_json().encode("utf-8")
    return hashlib.sha256(raw).hexdigest()[:16]


def to_logit_vector(logits: Any) -> np.ndarray:
    """Convert caller logits to a 1-D float64 array.

    Accepts lists, numpy arrays, and tensor-like objects exposing
    ``detach().cpu().numpy()``. Values are rounded through float32, the
    width models emit logits in.

    Args:
        logits: One row of logits, indexed by vocabulary id.

    Returns:
        A new float64 array of shape ``(vocab_size,)``.

    Raises:
        ValueError: If *logits* is not one-dimensional.
    """
    if not isinstance(logits, np.ndarray):
        try:
            logits = logits.detach().cpu().numpy()
        except AttributeError:
            pass
    values = np.asarray(logits, dtype=np.float32)
    if values.ndim != 1:
        raise ValueError(f"logits must be 1-D, got shape {values.shape}")
    return values.astype(np.float64)


class RequestState:
    """Per-request sampling state.

    Attributes:
        config: Resolved per-request configuration.
        sampler: Sampler owned by this request.
        config_hash_str: Short hash for logging.
    """

    __slots__ = ("config", "config_hash_str", "sampler")

    def __init__(self, config: SamplerConfig, sampler: Sampler, config_hash_str: str) -> None:
        self.config = config
        self.sampler = sampler
        self.config_hash_str = config_hash_str


class SamplingEngine:
    """Builds per-request samplers and runs sampling calls with diagnostics.

    Usage::

        engine = SamplingEngine()
        request = engine.start_request({"temperature": 0.7, "top_k": 40, "seed": 7})
        token_id = engine.sample(logits, request)
    """

    def __init__(self, config: SamplerConfig | None = None) -> None:
        """Initialize the engine.

        Args:
            config: Default configuration. ``None`` loads it from the
                environment.
        """
        self._default_config = config if config is not None else SamplerConfig()
        self._default_config_hash = _config_hash(self._default_config)
        self._default_request: RequestState | None = None
        # Serializes building and sampling the shared default request.
        self._default_lock = threading.Lock()
        self._logger = SamplingLogger(self._default_config)

        logger.info(
            "SamplingEngine initialized: temperature=%s, top_k=%s, top_p=%s, min_p=%s, "
            "seeded=%s",
            self._default_config.temperature,
            self._default_config.top_k,
            self._default_config.top_p,
            self._default_config.min_p,
            self._default_config.seed is not None,
        )

    @classmethod
    def validate_options(cls, options: dict[str, Any] | None) -> None:
        """Reject per-request options that try to override process-wide fields.

        Raises:
            InvalidParameterError: If a key names a process-wide field.
        """
        validate_options(options)

    def build(self, options: dict[str, Any] | None = None) -> Sampler:
        """Resolve *options* against the defaults and build a new sampler.

        Raises:
            InvalidParameterError: If an option is invalid or out of range.
            InvalidConfigurationError: If no transform would be active.
        """
        return build_sampler(resolve_config(self._default_config, options))

    def start_request(self, options: dict[str, Any] | None = None) -> RequestState:
        """Create the sampling state for one generation request.

        Validation happens here, before any token is sampled.

        Args:
            options: Per-request sampling options (temperature, top_k,
                top_p, min_p, seed).

        Returns:
            A RequestState owning a freshly built sampler.

        Raises:
            InvalidParameterError: If an option is invalid or out of range.
            InvalidConfigurationError: If no transform would be active.
        """
        config = resolve_config(self._default_config, options)
        if config is self._default_config:
            hash_str = self._default_config_hash
        else:
            hash_str = _config_hash(config)
        return RequestState(config=config, sampler=build_sampler(config), config_hash_str=hash_str)

    def select(self, logits: Any, request: RequestState | None = None) -> SelectionResult:
        """Sample one token and log a diagnostic record.

        Args:
            logits: One row of logits (list, numpy array or tensor-like).
            request: State from ``start_request()``. ``None`` uses a shared
                request built from the default config. Its sampler and RNG
                are shared by every such caller, and calls on it are
                serialized by a lock; concurrent generation streams should
                each call ``start_request()`` instead.

        Returns:
            SelectionResult for the sampled token.

        Raises:
            NoValidTokenError: If no admissible token exists.
            SamplingFailureError: If the weighted draw cannot select a token.
        """
        if request is None:
            with self._default_lock:
                return self._select(logits, self._get_default_request())
        return self._select(logits, request)

    def _select(self, logits: Any, request: RequestState) -> SelectionResult:
        t_start_ns = time.perf_counter_ns()
        vector = to_logit_vector(logits)
        result = request.sampler.select(vector)
        total_sampling_ms = (time.perf_counter_ns() - t_start_ns) / 1_000_000.0

        record = TokenSamplingRecord(
            timestamp_ns=t_start_ns,
            total_sampling_ms=total_sampling_ms,
            sampler=result.diagnostics.get("sampler", request.sampler.name),
            transforms=tuple(result.diagnostics.get("transforms", ())),
            temperature=request.config.temperature,
            seeded=bool(getattr(request.sampler, "seeded", False)),
            shannon_entropy=result.diagnostics.get("shannon_entropy", 0.0),
            token_id=result.token_id,
            token_prob=result.token_prob,
            num_candidates=result.num_candidates,
            config_hash=request.config_hash_str,
        )
        self._logger.log_token(record)
        return result

    def sample(self, logits: Any, request: RequestState | None = None) -> int:
        """Sample one token id. See ``select()``."""
        return self.select(logits, request).token_id

    def _get_default_request(self) -> RequestState:
        """Return the shared default request, building it on first use.

        Callers must hold ``self._default_lock``.
        """
        if self._default_request is None:
            self._default_request = RequestState(
                config=self._default_config,
                sampler=build_sampler(self._default_config),
                config_hash_str=self._default_config_hash,
            )
        return self._default_request

    @property
    def default_config(self) -> SamplerConfig:
        """The default configuration."""
        return self._default_config

    @property
    def sampling_logger(self) -> SamplingLogger:
        """The diagnostic logger for this engine."""
        return self._logger
