"""
Configuration file support for cmdapp.

Provides hierarchical configuration loading from:
1. Project config: .cmdapp.toml or cmdapp.toml in the project root
2. User config: ~/.config/cmdapp/config.toml

Command-line options override config file values, and project config
overrides user config.
"""

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cmdapp.exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

# Config file names to search for in project directories
CONFIG_FILENAMES = [".cmdapp.toml", "cmdapp.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "cmdapp" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "app": {"name", "flag_error_handling"},
    "gen": {"output", "module", "function"},
}

FLAG_ERROR_HANDLING_CHOICES = ("continue", "exit")


@dataclass
class AppConfig:
    """Settings used by App.from_config()."""

    name: str | None = None
    flag_error_handling: str = "continue"


@dataclass
class GenConfig:
    """Defaults for the cmdapp-gen command."""

    output: str | None = None
    module: str | None = None
    function: str = "register_commands"


@dataclass
class Config:
    """Merged configuration from all sources."""

    app: AppConfig = field(default_factory=AppConfig)
    gen: GenConfig = field(default_factory=GenConfig)

    # Track which file each setting came from
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        # Stop at filesystem root
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any] | None:
    """
    Load a TOML file safely.

    Returns:
        Parsed TOML data or None when no TOML parser is available

    Raises:
        ConfigError: If TOML is invalid or the file cannot be read
    """
    if tomllib is None:
        warnings.warn(
            "tomli package not installed. Config file support requires 'pip install tomli' for Python < 3.11.",
            stacklevel=2,
        )
        return None

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", context={"file": str(path)}) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", context={"file": str(path)}) from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """Merge loaded config data into a Config object, recording sources."""
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    if "app" in data:
        app_data = data["app"]
        _warn_unknown_keys(app_data, KNOWN_KEYS["app"], "app", source)

        if "name" in app_data:
            config.app.name = app_data["name"]
            sources["app.name"] = source
        if "flag_error_handling" in app_data:
            value = app_data["flag_error_handling"]
            if value not in FLAG_ERROR_HANDLING_CHOICES:
                raise ConfigError(
                    f"Invalid value for app.flag_error_handling: {value!r}",
                    context={"file": source},
                    suggestions=[f"Use one of: {', '.join(FLAG_ERROR_HANDLING_CHOICES)}"],
                )
            config.app.flag_error_handling = value
            sources["app.flag_error_handling"] = source

    if "gen" in data:
        gen_data = data["gen"]
        _warn_unknown_keys(gen_data, KNOWN_KEYS["gen"], "gen", source)

        for key in ("output", "module", "function"):
            if key in gen_data:
                setattr(config.gen, key, gen_data[key])
                sources[f"gen.{key}"] = source


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# cmdapp configuration file
# Place as .cmdapp.toml in project root or ~/.config/cmdapp/config.toml for user defaults

[app]
# Program name shown in usage output (default: the script name)
# name = "myprog"

# What flag parsing errors do: "continue" returns them to the dispatcher,
# "exit" terminates the process with code 2
# flag_error_handling = "continue"

[gen]
# Output file written by cmdapp-gen
# output = "commands_gen.py"

# Module the generated file imports the command functions from
# module = "myprog.commands"

# Name of the generated registration function
# function = "register_commands"
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
