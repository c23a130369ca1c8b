#!/usr/bin/env python3
"""
Configuration loading for git-branch-notes.

Implements cascading configuration:
1. Built-in defaults
2. Global config (~/.config/git-branch-notes/config.yaml,
   or the file named by GIT_BRANCH_NOTES_CONFIG)
3. Repository config (<git-dir>/info/branch-notes.yaml) - inside the git
   directory, so it is never committed

Later layers are deep-merged over earlier ones. Configuration only affects
ambient behaviour (logging); it never changes where notes are stored or how
the editor is chosen.
"""
import copy
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

import yaml

from branch_notes.colors import warning


CONFIG_ENV_VAR = "GIT_BRANCH_NOTES_CONFIG"
REPO_CONFIG_NAME = "branch-notes.yaml"

DEFAULT_CONFIG = {
    "logging": {
        "level": "error",
        "destinations": ["file"],
    },
}


def _warn(message: str) -> None:
    print(warning(message, stream=sys.stderr), file=sys.stderr)


def load_yaml(path: Path) -> dict:
    """
    Load a YAML config file.

    Args:
        path: Path to config file

    Returns:
        Parsed config dictionary (empty dict if missing or invalid)
    """
    if not path.exists():
        return {}

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        _warn(f"⚠️ YAML parse error in {path}: {e}")
        return {}
    except OSError as e:
        _warn(f"⚠️ Could not load {path}: {e}")
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        _warn(f"⚠️ Ignoring {path}: top level must be a mapping")
        return {}
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge override into base dictionary.

    Recursively merges nested dictionaries. Non-dict values are replaced.

    Args:
        base: Base dictionary (modified in place)
        override: Dictionary with values to merge

    Returns:
        Merged dictionary (same as base)
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def get_global_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Get the path to the user-wide config file."""
    env = os.environ if environ is None else environ
    if override := env.get(CONFIG_ENV_VAR):
        return Path(override).expanduser()
    return Path.home() / ".config" / "git-branch-notes" / "config.yaml"


def get_repo_config_path(git_dir: str) -> Path:
    """Get the path to the per-repository config file."""
    return Path(git_dir) / "info" / REPO_CONFIG_NAME


class NotesConfig:
    """
    Configuration manager for git-branch-notes.

    Loads and merges configuration from defaults, the global file and the
    repository file.
    """

    def __init__(self, git_dir: Optional[str] = None, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize config.

        Args:
            git_dir: Repository git directory (None to skip the repository layer)
            environ: Environment mapping (defaults to os.environ)
        """
        self.git_dir = git_dir
        self.environ = os.environ if environ is None else environ
        self.sources: list[Path] = []
        self._config = self._load_cascade()

    def _load_cascade(self) -> dict:
        config = copy.deepcopy(DEFAULT_CONFIG)

        layers = [get_global_config_path(self.environ)]
        if self.git_dir:
            layers.append(get_repo_config_path(self.git_dir))

        for path in layers:
            data = load_yaml(path)
            if data:
                deep_merge(config, data)
                self.sources.append(path)

        return config

    def get_logging_config(self) -> dict:
        """Return the logging section (level, destinations, file)."""
        logging_config = self._config.get("logging")
        if not isinstance(logging_config, dict):
            return dict(DEFAULT_CONFIG["logging"])
        return logging_config
