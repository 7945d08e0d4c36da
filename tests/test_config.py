"""
Tests for compiler settings.
"""
import pytest

from ddlforge.config import CompilerSettings, load_settings
from ddlforge.constants import DIALECT_ENV_VAR
from ddlforge.schema import ConfigError


class TestCompilerSettings:

    def test_defaults(self):
        settings = CompilerSettings()
        assert settings.dialect == "sqlserver"
        assert settings.prefix == ""
        assert settings.escape_defaults is True
        assert settings.terminator == ";"

    def test_with_overrides_ignores_none(self):
        settings = CompilerSettings().with_overrides(dialect="mysql", prefix=None)
        assert settings.dialect == "mysql"
        assert settings.prefix == ""

    def test_invalid_keyword_case(self):
        with pytest.raises(ConfigError):
            CompilerSettings(keyword_case="shouting")

    def test_unknown_keys(self):
        with pytest.raises(ConfigError, match="colour"):
            CompilerSettings.from_dict({"colour": "red"})


class TestLoadSettings:
    """Test YAML settings files and environment overrides."""

    @pytest.fixture(autouse=True)
    def clear_env(self, monkeypatch):
        monkeypatch.delenv(DIALECT_ENV_VAR, raising=False)

    def test_load_file(self, tmp_path):
        path = tmp_path / "ddlforge.yaml"
        path.write_text("dialect: postgresql\nprefix: app_\npretty: true\n", encoding="utf-8")
        settings = load_settings(path)
        assert settings.dialect == "postgresql"
        assert settings.prefix == "app_"
        assert settings.pretty is True

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == CompilerSettings()

    def test_no_file(self):
        assert load_settings() == CompilerSettings()

    def test_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / "ddlforge.yaml"
        path.write_text("dialect: postgresql\n", encoding="utf-8")
        monkeypatch.setenv(DIALECT_ENV_VAR, "sqlite")
        assert load_settings(path).dialect == "sqlite"

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(tmp_path / "nope.yaml")
