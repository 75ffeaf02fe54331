"""Tests for config.py."""

from pathlib import Path

import pytest

from config import Config, DEFAULTS


class TestConfigLoad:
    """Tests for Config.load()."""

    def test_load_with_defaults_when_no_config_file(self, tmp_path):
        """Config uses defaults when config file doesn't exist."""
        config = Config.load(config_path=tmp_path / "nonexistent.toml")

        assert config.host == DEFAULTS["host"]
        assert config.repo == DEFAULTS["repo"]
        assert config.user_agent == DEFAULTS["user_agent"]
        assert config.max_redirects == DEFAULTS["max_redirects"]
        assert config.output_path == Path(DEFAULTS["output_path"])

    def test_load_from_toml_file(self, tmp_path, config_toml_content):
        """Config loads values from TOML file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text(config_toml_content)

        config = Config.load(config_path=config_file)

        assert config.host == "git.example.com"
        assert config.api_host == "api.git.example.com"
        assert config.org == "example"
        assert config.repo == "widget"
        assert config.output_path == Path("/tmp/custom-pin.json")
        assert config.max_redirects == 2
        assert config.timeout == 10.0

    def test_cli_overrides_take_precedence(self, tmp_path, config_toml_content):
        """CLI overrides take precedence over config file values."""
        config_file = tmp_path / "config.toml"
        config_file.write_text(config_toml_content)

        config = Config.load(
            config_path=config_file,
            output_override="/cli/pin.json",
            host_override="cli.example.com",
            repo_override="gadget",
        )

        assert config.output_path == Path("/cli/pin.json")
        assert config.host == "cli.example.com"
        assert config.repo == "gadget"
        # Untouched keys still come from the file
        assert config.org == "example"

    def test_negative_max_redirects_rejected(self, tmp_path):
        """Negative redirect budget is a configuration error."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("max_redirects = -1\n")

        with pytest.raises(ValueError, match="max_redirects"):
            Config.load(config_path=config_file)

    def test_non_positive_timeout_rejected(self, tmp_path):
        """Zero timeout is a configuration error."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("timeout = 0\n")

        with pytest.raises(ValueError, match="timeout"):
            Config.load(config_path=config_file)

    def test_output_path_expansion(self, tmp_path):
        """Output path with ~ is expanded."""
        config = Config.load(
            config_path=tmp_path / "nonexistent.toml",
            output_override="~/pins/n3h.json",
        )

        assert "~" not in str(config.output_path)


class TestConfigUrls:
    """Tests for Config URL builders."""

    def test_package_url(self, sample_config):
        assert (
            sample_config.package_url("v1.2.3")
            == "https://github.com/holochain/n3h/raw/v1.2.3/package.json"
        )

    def test_release_url(self, sample_config):
        assert (
            sample_config.release_url("v1.2.3")
            == "https://api.github.com/repos/holochain/n3h/releases/tags/v1.2.3"
        )

    def test_artifact_url(self, sample_config):
        assert sample_config.artifact_url("v1.2.3", "1.2.3", "win-x64.exe") == (
            "https://github.com/holochain/n3h/releases/download/"
            "v1.2.3/n3h-1.2.3-win-x64.exe"
        )

    def test_checksum_url_is_artifact_url_plus_suffix(self, sample_config):
        artifact = sample_config.artifact_url("v1.2.3", "1.2.3", "linux-x64.tar.gz")
        checksum = sample_config.checksum_url("v1.2.3", "1.2.3", "linux-x64.tar.gz")

        assert checksum == artifact + ".sha256"
