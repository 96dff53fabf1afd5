"""Unit tests for configuration loading and precedence."""

from pathlib import Path

import pytest

from liquiddocs.core.objects import SHOPIFY_OBJECTS
from liquiddocs.utils.config import (
    DEFAULT_MAX_BUFFER_SIZE,
    LiquidDocsConfig,
    create_default_config,
    find_config_file,
    load_config,
    load_config_file,
)


class TestConfigFileLoading:
    """Test configuration file loading."""

    @pytest.fixture
    def temp_config_file(self, tmp_path: Path) -> Path:
        """Create a temporary config file."""
        config_file = tmp_path / "liquiddocs.toml"
        config_content = """
[liquiddocs]
warn = true
error_on_parse = true
extra_types = ["widget", "gadget"]
max_buffer_size = 1024
"""
        config_file.write_text(config_content)
        return config_file

    @pytest.fixture
    def temp_pyproject_file(self, tmp_path: Path) -> Path:
        """Create a temporary pyproject.toml file."""
        config_file = tmp_path / "pyproject.toml"
        config_content = """
[tool.liquiddocs]
ci = true
file_pattern = "snippets/*.liquid"
"""
        config_file.write_text(config_content)
        return config_file

    def test_load_config_from_liquiddocs_toml(self, temp_config_file: Path) -> None:
        """Test loading config from liquiddocs.toml."""
        config_data = load_config_file(temp_config_file)

        assert config_data["warn"] is True
        assert config_data["error_on_parse"] is True
        assert config_data["extra_types"] == ["widget", "gadget"]
        assert config_data["max_buffer_size"] == 1024

    def test_load_config_from_pyproject_toml(self, temp_pyproject_file: Path) -> None:
        """Test loading config from pyproject.toml."""
        config_data = load_config_file(temp_pyproject_file)

        assert config_data == {"ci": True, "file_pattern": "snippets/*.liquid"}

    def test_load_config_without_section(self, tmp_path: Path) -> None:
        """Test that a file without [liquiddocs] table is read as a whole."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("warn = true\n")

        assert load_config_file(config_file) == {"warn": True}

    def test_load_config_file_not_found(self) -> None:
        """Test loading config from non-existent file."""
        with pytest.raises(FileNotFoundError):
            load_config_file(Path("/nonexistent/config.toml"))

    def test_load_config_invalid_toml(self, tmp_path: Path) -> None:
        """Test loading invalid TOML file."""
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("this is not valid TOML [[[")

        with pytest.raises(ValueError, match="Invalid config file"):
            load_config_file(invalid_file)

    def test_find_config_file_liquiddocs_toml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test finding liquiddocs.toml in current directory."""
        config_file = tmp_path / "liquiddocs.toml"
        config_file.write_text("[liquiddocs]\nwarn = true")

        monkeypatch.chdir(tmp_path)
        found = find_config_file()

        assert found == config_file

    def test_find_config_file_pyproject_toml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test finding pyproject.toml with [tool.liquiddocs] section."""
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text("[tool.liquiddocs]\nwarn = true")

        monkeypatch.chdir(tmp_path)
        found = find_config_file()

        assert found == config_file

    def test_find_config_file_pyproject_without_section(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that pyproject.toml without [tool.liquiddocs] is not found."""
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text("[tool.other]\nkey = 'value'")

        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        found = find_config_file()

        assert found is None

    def test_find_config_file_none(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test when no config file exists."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        found = find_config_file()

        assert found is None


class TestConfigPrecedence:
    """Test configuration precedence: CLI > config file > env > defaults."""

    @pytest.fixture
    def config_file(self, tmp_path: Path) -> Path:
        """Create a config file for testing."""
        config_file = tmp_path / "test_config.toml"
        config_content = """
[liquiddocs]
warn = true
file_pattern = "sections/*.liquid"
"""
        config_file.write_text(config_content)
        return config_file

    @pytest.fixture
    def isolated_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
        """Run in an empty directory so no config file is discovered."""
        workdir = tmp_path / "work"
        workdir.mkdir()
        monkeypatch.chdir(workdir)
        monkeypatch.setenv("HOME", str(workdir))
        return workdir

    def test_default_values_only(self, isolated_cwd: Path) -> None:
        """Test that defaults are used when no config, env, or CLI args provided."""
        config = load_config(config_path=None)

        assert config.file_pattern == "**/*.liquid"
        assert config.exclude_patterns == ["**/node_modules/**", "**/.*/**"]
        assert config.max_buffer_size == DEFAULT_MAX_BUFFER_SIZE
        assert config.warn is False
        assert config.error_on_parse is False
        assert config.ci is False
        assert config.extra_types == []

    def test_config_file_overrides_defaults(self, config_file: Path) -> None:
        """Test that config file values override defaults."""
        config = load_config(config_path=config_file)

        assert config.warn is True
        assert config.file_pattern == "sections/*.liquid"
        assert config.ci is False  # Default

    def test_env_vars_override_defaults(
        self, isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that environment variables override defaults."""
        monkeypatch.setenv("LIQUIDDOCS_CI", "true")
        monkeypatch.setenv("LIQUIDDOCS_MAX_BUFFER_SIZE", "2048")
        monkeypatch.setenv("LIQUIDDOCS_EXTRA_TYPES", '["widget"]')

        config = load_config(config_path=None)

        assert config.ci is True
        assert config.max_buffer_size == 2048
        assert config.extra_types == ["widget"]

    def test_config_file_overrides_env_vars(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that config file values win over environment variables."""
        monkeypatch.setenv("LIQUIDDOCS_WARN", "false")
        monkeypatch.setenv("LIQUIDDOCS_ERROR_ON_PARSE", "true")

        config = load_config(config_path=config_file)

        assert config.warn is True  # From file
        assert config.error_on_parse is True  # From env

    def test_cli_args_override_config_file(self, config_file: Path) -> None:
        """Test that CLI arguments override config file values."""
        config = load_config(config_path=config_file, warn=False, ci=True)

        assert config.warn is False
        assert config.ci is True
        assert config.file_pattern == "sections/*.liquid"

    def test_cli_none_values_do_not_override(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that None values from CLI don't override config/env."""
        config = load_config(config_path=config_file, warn=None, file_pattern=None)

        assert config.warn is True
        assert config.file_pattern == "sections/*.liquid"


class TestConfigValidation:
    """Test configuration validation."""

    def test_invalid_log_level(self) -> None:
        """Test that invalid log level raises ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            LiquidDocsConfig(log_level="INVALID")

    def test_valid_log_levels(self) -> None:
        """Test that all valid log levels are accepted and normalized."""
        for level in ["debug", "INFO", "Warning", "ERROR", "CRITICAL"]:
            assert LiquidDocsConfig(log_level=level).log_level == level.upper()

    def test_invalid_log_format(self) -> None:
        """Test that invalid log format raises ValueError."""
        with pytest.raises(ValueError, match="Invalid log format"):
            LiquidDocsConfig(log_format="xml")

    def test_buffer_size_must_be_positive(self) -> None:
        """Test that a zero buffer is rejected."""
        with pytest.raises(ValueError):
            LiquidDocsConfig(max_buffer_size=0)

    def test_extra_types_are_cleaned(self) -> None:
        """Test that blank type names are dropped."""
        config = LiquidDocsConfig(extra_types=[" widget ", "", "  "])

        assert config.extra_types == ["widget"]

    def test_allowed_types(self) -> None:
        """Test that extra types extend the object list."""
        config = LiquidDocsConfig(extra_types=["widget"])

        allowed = config.allowed_types()

        assert "widget" in allowed
        assert "product" in allowed
        assert "widget" not in SHOPIFY_OBJECTS


class TestCreateDefaultConfig:
    """Test writing the default configuration file."""

    def test_creates_loadable_file(self, tmp_path: Path) -> None:
        """Test that the generated file loads back into defaults."""
        output = tmp_path / "liquiddocs.toml"

        create_default_config(output)
        config = load_config(config_path=output)

        assert config.file_pattern == "**/*.liquid"
        assert config.max_buffer_size == DEFAULT_MAX_BUFFER_SIZE
        assert config.warn is False

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        """Test that an existing file is kept."""
        output = tmp_path / "liquiddocs.toml"
        output.write_text("keep me")

        with pytest.raises(FileExistsError):
            create_default_config(output)

        assert output.read_text() == "keep me"
