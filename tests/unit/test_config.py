"""Test Settings loading and the active runtime configuration."""

import pytest
from pydantic import ValidationError

from axiomatic import Settings, configure, current_settings, load_settings
from axiomatic.core.config import BindingConfig


class TestSettingsDefaults:
    def test_default_settings(self):
        settings = Settings()
        assert settings.debug is False
        assert settings.bindings.divergence_limit == 5
        assert settings.observability.log_level == "WARNING"
        assert settings.observability.log_format == "console"

    def test_negative_divergence_limit_rejected(self):
        with pytest.raises(ValidationError):
            BindingConfig(divergence_limit=-1)


class TestLoadSettings:
    def test_load_from_toml(self, tmp_path):
        path = tmp_path / "axiomatic.toml"
        path.write_text(
            "debug = true\n"
            "\n"
            "[bindings]\n"
            "divergence_limit = 12\n"
            "\n"
            "[observability]\n"
            'log_format = "json"\n'
        )
        settings = load_settings(path)
        assert settings.debug is True
        assert settings.bindings.divergence_limit == 12
        assert settings.observability.log_format == "json"

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "nope.toml")
        assert settings.bindings.divergence_limit == 5

    def test_overrides_win(self, tmp_path):
        path = tmp_path / "axiomatic.toml"
        path.write_text("debug = false\n")
        settings = load_settings(path, overrides={"debug": True})
        assert settings.debug is True

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("AXIOMATIC_DEBUG", "true")
        monkeypatch.setenv("AXIOMATIC_BINDINGS__DIVERGENCE_LIMIT", "3")
        settings = load_settings()
        assert settings.debug is True
        assert settings.bindings.divergence_limit == 3


@pytest.mark.usefixtures("restore_settings")
class TestConfigure:
    def test_configure_replaces_active_settings(self):
        settings = Settings(debug=True)
        assert configure(settings) is settings
        assert current_settings() is settings

    def test_configure_with_overrides(self):
        base = Settings()
        active = configure(base, debug=True)
        assert active.debug is True
        assert base.debug is False
        assert current_settings() is active
