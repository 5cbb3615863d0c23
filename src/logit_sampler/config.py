"""Configuration system for logit-sampler.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (LOGIT_SAMPLER_*) -> .env file -> field defaults.

Per-request overrides are applied via resolve_config() which creates a new
config instance without mutating the defaults. Logging fields are
process-wide and protected from per-request override.

Range checks are not declared on the fields: the sampler builder performs
them in a fixed order so the first invalid parameter is always the one
reported.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from logit_sampler.exceptions import InvalidParameterError

# Fields that can be overridden per-request via caller-supplied options.
_PER_REQUEST_FIELDS: frozenset[str] = frozenset(
    {
        "temperature",
        "top_k",
        "top_p",
        "min_p",
        "seed",
    }
)

# All known config field names (populated after class definition).
_ALL_FIELDS: frozenset[str] = frozenset()


class SamplerConfig(BaseSettings):
    """Configuration for logit-sampler.

    Resolution order: init kwargs -> env vars (LOGIT_SAMPLER_*) -> .env file -> defaults.

    Fields are divided into two groups:
    - **Sampling parameters**: temperature, top-k, top-p, min-p, seed.
      Overridable per-request.
    - **Logging**: verbosity and diagnostic record retention. Process-wide.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGIT_SAMPLER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # --- Sampling (per-request overridable) ---

    temperature: float = Field(
        default=0.8,
        description="Sampling temperature in [0, 2]; 0 forces greedy selection",
    )
    top_k: int | None = Field(
        default=40,
        description="Keep the k most probable tokens (None or 0 disables)",
    )
    top_p: float | None = Field(
        default=0.9,
        description="Nucleus threshold in [0, 1) (None or 0 disables)",
    )
    min_p: float | None = Field(
        default=0.0,
        description="Relative probability floor in [0, 1) (None or 0 disables)",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for reproducible weighted sampling (None = OS entropy)",
    )

    # --- Logging (NOT per-request overridable) ---

    log_level: Literal["none", "summary", "full"] = Field(
        default="summary",
        description="Logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Store all token records in memory for analysis",
    )


# Populate _ALL_FIELDS now that the class is defined.
_ALL_FIELDS = frozenset(SamplerConfig.model_fields.keys())


def validate_options(options: dict[str, Any] | None) -> None:
    """Validate option keys without creating a config.

    Keys that name no config field are ignored: they belong to other
    layers (context size, stop sequences, ...).

    Args:
        options: Caller-supplied sampling options.

    Raises:
        InvalidParameterError: If a key names a process-wide field.
    """
    if not options:
        return
    for key in options:
        if key in _ALL_FIELDS and key not in _PER_REQUEST_FIELDS:
            raise InvalidParameterError(
                f"Field '{key}' is a process-wide setting and cannot be "
                f"overridden per-request"
            )


def resolve_config(
    defaults: SamplerConfig,
    options: dict[str, Any] | None,
) -> SamplerConfig:
    """Create a new config instance merging defaults with per-request options.

    Args:
        defaults: The base configuration loaded from environment.
        options: Per-request overrides keyed by field name.

    Returns:
        *defaults* itself if nothing is overridden, otherwise a new
        SamplerConfig with overrides applied.

    Raises:
        InvalidParameterError: If a key is not overridable or a value fails
            type validation.
    """
    if not options:
        return defaults

    validate_options(options)

    overrides = {key: value for key, value in options.items() if key in _PER_REQUEST_FIELDS}
    if not overrides:
        return defaults

    # model_validate runs full type coercion; model_copy(update=...) would not.
    # It also skips the settings sources, so env vars are not re-read.
    merged = defaults.model_dump()
    merged.update(overrides)
    try:
        return SamplerConfig.model_validate(merged)
    except ValidationError as exc:
        raise InvalidParameterError(f"Invalid sampling option: {exc}") from exc
