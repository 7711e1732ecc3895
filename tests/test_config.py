"""Tests for configuration file support."""

import pytest

from cmdapp import config as config_module
from cmdapp.config import (
    AppConfig,
    Config,
    ConfigError,
    GenConfig,
    _find_project_config,
    _load_toml_file,
    generate_template,
    get_config_paths,
)


class TestConfigDataclasses:
    """Test configuration dataclass defaults."""

    def test_app_config_defaults(self):
        """AppConfig has correct defaults."""
        config = AppConfig()
        assert config.name is None
        assert config.flag_error_handling == "continue"

    def test_gen_config_defaults(self):
        """GenConfig has correct defaults."""
        config = GenConfig()
        assert config.output is None
        assert config.module is None
        assert config.function == "register_commands"


class TestFindProjectConfig:
    """Tests for project config discovery."""

    def test_finds_in_start_dir(self, isolated_config):
        path = isolated_config / ".cmdapp.toml"
        path.write_text("")
        assert _find_project_config(isolated_config) == path.resolve()

    def test_finds_plain_name(self, isolated_config):
        path = isolated_config / "cmdapp.toml"
        path.write_text("")
        assert _find_project_config(isolated_config) == path.resolve()

    def test_walks_up(self, isolated_config):
        """Config in a parent directory is found from a subdirectory."""
        path = isolated_config / ".cmdapp.toml"
        path.write_text("")
        sub = isolated_config / "src" / "pkg"
        sub.mkdir(parents=True)
        assert _find_project_config(sub) == path.resolve()

    def test_stops_at_git_root(self, isolated_config):
        """The walk does not leave the repository."""
        (isolated_config.parent / ".cmdapp.toml").write_text("")
        assert _find_project_config(isolated_config) is None


class TestLoad:
    """Tests for Config.load()."""

    def test_defaults_without_files(self, isolated_config):
        config = Config.load()
        assert config.app.name is None
        assert config.gen.function == "register_commands"
        assert config.get_source("gen.output") == "default"

    def test_project_config(self, isolated_config):
        path = isolated_config / ".cmdapp.toml"
        path.write_text(
            '[app]\nname = "tool"\nflag_error_handling = "exit"\n\n'
            '[gen]\noutput = "commands_gen.py"\nmodule = "tool.commands"\n'
        )
        config = Config.load()
        assert config.app.name == "tool"
        assert config.app.flag_error_handling == "exit"
        assert config.gen.output == "commands_gen.py"
        assert config.gen.module == "tool.commands"
        assert config.get_source("gen.output") == str(path.resolve())

    def test_project_overrides_user(self, isolated_config):
        user = config_module.USER_CONFIG_PATH
        user.parent.mkdir(parents=True)
        user.write_text('[gen]\noutput = "user.py"\nfunction = "setup"\n')
        (isolated_config / "cmdapp.toml").write_text('[gen]\noutput = "project.py"\n')

        config = Config.load()
        assert config.gen.output == "project.py"
        assert config.gen.function == "setup"
        assert config.get_source("gen.function") == str(user)

    def test_unknown_keys_warn(self, isolated_config):
        (isolated_config / ".cmdapp.toml").write_text('[gen]\noutptu = "x.py"\n\n[extra]\n')
        with pytest.warns(UserWarning, match="Unknown config key"):
            Config.load()

    def test_invalid_toml(self, isolated_config):
        (isolated_config / ".cmdapp.toml").write_text("[gen\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            Config.load()

    def test_invalid_flag_error_handling(self, isolated_config):
        (isolated_config / ".cmdapp.toml").write_text('[app]\nflag_error_handling = "panic"\n')
        with pytest.raises(ConfigError) as exc_info:
            Config.load()
        assert "continue, exit" in str(exc_info.value)


class TestHelpers:
    """Tests for template and path helpers."""

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            _load_toml_file(tmp_path / "missing.toml")

    def test_template_is_valid_toml(self, tmp_path):
        """The template parses and only contains known sections."""
        path = tmp_path / "config.toml"
        path.write_text(generate_template())
        data = _load_toml_file(path)
        assert set(data) == {"app", "gen"}

    def test_get_config_paths(self, isolated_config):
        assert get_config_paths() == {"user": None, "project": None}
        path = isolated_config / ".cmdapp.toml"
        path.write_text("")
        assert get_config_paths()["project"] == path.resolve()
