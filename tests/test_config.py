"""Tests for logit_sampler.config.

Covers:
- Default values
- Environment variable loading (monkeypatch)
- resolve_config merge logic and type coercion
- Rejection of process-wide fields in per-request options
- Frozen immutability of SamplerConfig
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from logit_sampler.config import (
    _PER_REQUEST_FIELDS,
    SamplerConfig,
    resolve_config,
    validate_options,
)
from logit_sampler.exceptions import InvalidParameterError


class TestSamplerConfigDefaults:
    """Verify default values."""

    def test_sampling_defaults(self, default_config: SamplerConfig) -> None:
        assert default_config.temperature == 0.8
        assert default_config.top_k == 40
        assert default_config.top_p == 0.9
        assert default_config.min_p == 0.0
        assert default_config.seed is None

    def test_logging_defaults(self, default_config: SamplerConfig) -> None:
        assert default_config.log_level == "summary"
        assert default_config.diagnostic_mode is False

    def test_per_request_fields(self) -> None:
        assert {"temperature", "top_k", "top_p", "min_p", "seed"} == _PER_REQUEST_FIELDS

    def test_frozen_immutability(self, default_config: SamplerConfig) -> None:
        with pytest.raises(ValidationError):
            default_config.top_k = 100  # type: ignore[misc]


class TestEnvironmentLoading:
    """Configuration from LOGIT_SAMPLER_* variables."""

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGIT_SAMPLER_TEMPERATURE", "0.3")
        monkeypatch.setenv("LOGIT_SAMPLER_TOP_K", "100")
        monkeypatch.setenv("LOGIT_SAMPLER_SEED", "7")
        monkeypatch.setenv("LOGIT_SAMPLER_LOG_LEVEL", "none")
        config = SamplerConfig(_env_file=None)  # type: ignore[call-arg]
        assert config.temperature == 0.3
        assert config.top_k == 100
        assert config.seed == 7
        assert config.log_level == "none"

    def test_init_kwargs_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGIT_SAMPLER_TOP_K", "100")
        config = SamplerConfig(_env_file=None, top_k=5)  # type: ignore[call-arg]
        assert config.top_k == 5

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGIT_SAMPLER_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            SamplerConfig(_env_file=None)  # type: ignore[call-arg]


class TestResolveConfig:
    """Tests for resolve_config merge logic."""

    def test_none_options_returns_defaults(self, default_config: SamplerConfig) -> None:
        assert resolve_config(default_config, None) is default_config

    def test_empty_options_returns_defaults(self, default_config: SamplerConfig) -> None:
        assert resolve_config(default_config, {}) is default_config

    def test_only_unknown_keys_returns_defaults(self, default_config: SamplerConfig) -> None:
        assert resolve_config(default_config, {"num_ctx": 4096}) is default_config

    def test_override_single_field(self, default_config: SamplerConfig) -> None:
        result = resolve_config(default_config, {"top_k": 100})
        assert result.top_k == 100
        assert result.top_p == default_config.top_p
        assert result.temperature == default_config.temperature

    def test_override_multiple_fields(self, default_config: SamplerConfig) -> None:
        result = resolve_config(
            default_config,
            {"temperature": 0.2, "top_k": 0, "top_p": None, "min_p": 0.05, "seed": 42},
        )
        assert result.temperature == 0.2
        assert result.top_k == 0
        assert result.top_p is None
        assert result.min_p == 0.05
        assert result.seed == 42

    def test_returns_new_instance(self, default_config: SamplerConfig) -> None:
        result = resolve_config(default_config, {"top_k": 999})
        assert result is not default_config
        assert default_config.top_k == 40

    def test_keeps_logging_fields(self) -> None:
        defaults = SamplerConfig(
            _env_file=None,  # type: ignore[call-arg]
            log_level="full",
            diagnostic_mode=True,
        )
        result = resolve_config(defaults, {"top_k": 10})
        assert result.log_level == "full"
        assert result.diagnostic_mode is True

    def test_unknown_keys_ignored(self, default_config: SamplerConfig) -> None:
        result = resolve_config(default_config, {"stop": ["\n"], "top_k": 100})
        assert result.top_k == 100

    def test_type_coercion_int_from_string(self, default_config: SamplerConfig) -> None:
        result = resolve_config(default_config, {"top_k": "100"})
        assert result.top_k == 100
        assert isinstance(result.top_k, int)

    def test_type_coercion_float_from_int(self, default_config: SamplerConfig) -> None:
        result = resolve_config(default_config, {"temperature": 1})
        assert result.temperature == 1.0

    def test_type_error_raises_invalid_parameter(self, default_config: SamplerConfig) -> None:
        with pytest.raises(InvalidParameterError, match="top_k"):
            resolve_config(default_config, {"top_k": "not_a_number"})

    def test_logging_field_rejected(self, default_config: SamplerConfig) -> None:
        with pytest.raises(InvalidParameterError, match="log_level"):
            resolve_config(default_config, {"log_level": "full"})


class TestValidateOptions:
    """Tests for validate_options."""

    def test_none_ok(self) -> None:
        validate_options(None)

    def test_valid_ok(self) -> None:
        validate_options({"temperature": 0.5, "seed": 3, "num_predict": 128})

    def test_process_wide_field_raises(self) -> None:
        with pytest.raises(InvalidParameterError, match="diagnostic_mode"):
            validate_options({"diagnostic_mode": True})
