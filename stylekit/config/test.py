"""Tests for configuration management."""

import logging

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    _convert_value,
    _parse_bool,
    get_breakpoints,
    get_environment,
    get_environment_info,
    get_log_level,
    get_widget_class_prefix,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("STYLEKIT_TABLET_MAX_WIDTH", raising=False)
        assert get_environment(EnvVar.STYLEKIT_TABLET_MAX_WIDTH) == 1023

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("STYLEKIT_MOBILE_MAX_WIDTH", "600")
        result = get_environment(EnvVar.STYLEKIT_MOBILE_MAX_WIDTH, override=480)
        assert result == 480

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("STYLEKIT_MOBILE_MAX_WIDTH", "600")
        result = get_environment(EnvVar.STYLEKIT_MOBILE_MAX_WIDTH)
        assert result == 600
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_falls_back_to_default(self, monkeypatch):
        """Unparseable integers resolve to the default."""
        monkeypatch.setenv("STYLEKIT_TABLET_MAX_WIDTH", "wide")
        assert get_environment(EnvVar.STYLEKIT_TABLET_MAX_WIDTH) == 1023

    @pytest.mark.unit
    def test_bool_type_conversion(self, monkeypatch):
        """Boolean type conversion for true and false values."""
        for value in ("true", "1", "yes", "ON"):
            monkeypatch.setenv("STYLEKIT_CSS_MINIFY", value)
            assert get_environment(EnvVar.STYLEKIT_CSS_MINIFY) is True
        for value in ("false", "0", "no", "Off"):
            monkeypatch.setenv("STYLEKIT_CSS_MINIFY", value)
            assert get_environment(EnvVar.STYLEKIT_CSS_MINIFY) is False

    @pytest.mark.unit
    def test_string_type(self, monkeypatch):
        """String type returns as-is."""
        monkeypatch.setenv("STYLEKIT_LOG_LEVEL", "DEBUG")
        assert get_environment(EnvVar.STYLEKIT_LOG_LEVEL) == "DEBUG"


# =============================================================================
# Tests for helpers and introspection
# =============================================================================


class TestConversionHelpers:
    """Tests for private conversion helpers."""

    @pytest.mark.unit
    def test_parse_bool_unrecognized(self):
        """Unrecognized strings parse to None."""
        assert _parse_bool("maybe") is None

    @pytest.mark.unit
    def test_convert_none_returns_default(self):
        """A missing value returns the default."""
        assert _convert_value(None, int, 7) == 7

    @pytest.mark.unit
    def test_convert_invalid_bool_returns_default(self):
        """Unparseable booleans return the default."""
        assert _convert_value("maybe", bool, False) is False


class TestIntrospection:
    """Tests for metadata access."""

    @pytest.mark.unit
    def test_get_environment_info(self):
        """Info returns the EnvConfig metadata."""
        info = get_environment_info(EnvVar.STYLEKIT_CSS_MINIFY)
        assert isinstance(info, EnvConfig)
        assert info.var_type is bool
        assert info.category == "css"

    @pytest.mark.unit
    def test_list_by_category(self):
        """Listing by category filters members."""
        names = [v.value.name for v in list_environment_variables("breakpoints")]
        assert names == ["STYLEKIT_TABLET_MAX_WIDTH", "STYLEKIT_MOBILE_MAX_WIDTH"]

    @pytest.mark.unit
    def test_list_all(self):
        """Listing without a category returns every member."""
        assert len(list_environment_variables()) == len(EnvVar)

    @pytest.mark.unit
    def test_names_match_members(self):
        """Every member's config name matches the member name."""
        for var in EnvVar:
            assert var.value.name == var.name


class TestConvenienceFunctions:
    """Tests for convenience accessors."""

    @pytest.mark.unit
    def test_default_breakpoints(self, monkeypatch):
        """Default breakpoints are 1023 and 767."""
        monkeypatch.delenv("STYLEKIT_TABLET_MAX_WIDTH", raising=False)
        monkeypatch.delenv("STYLEKIT_MOBILE_MAX_WIDTH", raising=False)
        assert get_breakpoints() == (1023, 767)

    @pytest.mark.unit
    def test_inverted_breakpoints_rejected(self):
        """Mobile must be narrower than tablet."""
        with pytest.raises(ValueError, match="narrower"):
            get_breakpoints(tablet=700, mobile=767)

    @pytest.mark.unit
    def test_log_level(self, monkeypatch):
        """Level names convert to logging constants."""
        monkeypatch.setenv("STYLEKIT_LOG_LEVEL", "warning")
        assert get_log_level() == logging.WARNING
        assert get_log_level("nonsense") == logging.INFO

    @pytest.mark.unit
    def test_widget_class_prefix(self, monkeypatch):
        """Prefix resolves from environment."""
        monkeypatch.setenv("STYLEKIT_WIDGET_CLASS_PREFIX", "xgp")
        assert get_widget_class_prefix() == "xgp"
