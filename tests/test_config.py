"""Tests for gifascii.config."""

from unittest.mock import patch

import pytest

from gifascii.config import (
    CACHE_STRATEGIES,
    DEFAULT_CONVERTER_CONFIG,
    ON_DEMAND_CACHE,
    ConverterConfig,
)


class TestConverterConfig:
    """Tests for ConverterConfig defaults and validation."""

    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            config = ConverterConfig()

        assert config.MIN_WIDTH == 20
        assert config.MAX_WIDTH == 250
        assert config.PREVIEW_WIDTH == 250
        assert config.ROW_SCALE == 0.5
        assert config.ALPHA_THRESHOLD == 128
        assert config.CONTRAST_EPSILON == 0.01
        assert config.CACHE_STRATEGY == "precomputed"

    def test_widths(self):
        widths = ConverterConfig().widths

        assert widths[0] == 20
        assert widths[-1] == 250
        assert len(widths) == 231
        assert 19 not in widths
        assert 251 not in widths

    def test_strategy_from_env(self):
        with patch.dict("os.environ", {"GIFASCII_CACHE_STRATEGY": "on_demand"}):
            assert ConverterConfig.from_env().CACHE_STRATEGY == "on_demand"

    def test_invalid_strategy_from_env(self):
        with patch.dict("os.environ", {"GIFASCII_CACHE_STRATEGY": "sometimes"}):
            with pytest.raises(ValueError, match="Invalid cache strategy"):
                ConverterConfig.from_env()

    def test_constructor_ignores_env(self):
        with patch.dict("os.environ", {"GIFASCII_CACHE_STRATEGY": "sometimes"}):
            assert ConverterConfig().CACHE_STRATEGY == "precomputed"

    def test_from_env_overrides_win(self):
        with patch.dict("os.environ", {"GIFASCII_CACHE_STRATEGY": "sometimes"}):
            config = ConverterConfig.from_env(CACHE_STRATEGY="on_demand", MAX_WIDTH=120)

        assert config.CACHE_STRATEGY == "on_demand"
        assert config.MAX_WIDTH == 120

    def test_from_env_without_env(self):
        with patch.dict("os.environ", {}, clear=True):
            assert ConverterConfig.from_env() == ConverterConfig()

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"MIN_WIDTH": 0}, "MIN_WIDTH"),
            ({"MIN_WIDTH": 50, "MAX_WIDTH": 40}, "MAX_WIDTH"),
            ({"ROW_SCALE": 0}, "ROW_SCALE"),
            ({"ALPHA_THRESHOLD": 300}, "ALPHA_THRESHOLD"),
            ({"CONTRAST_EPSILON": -0.1}, "CONTRAST_EPSILON"),
            ({"CACHE_STRATEGY": "eager"}, "cache strategy"),
            ({"LOCK_TIMEOUT_SECONDS": 0}, "LOCK_TIMEOUT_SECONDS"),
        ],
    )
    def test_validation(self, overrides, message):
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(ValueError, match=message):
                ConverterConfig(**overrides)

    def test_module_defaults(self):
        assert DEFAULT_CONVERTER_CONFIG.MIN_WIDTH == 20
        assert ON_DEMAND_CACHE["memory_limit_mb"] > 0
        assert CACHE_STRATEGIES == ("precomputed", "on_demand")
