#!/usr/bin/env python3

import os
import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import logging
import sys

import yaml

from .exit_codes import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("gitall")

DIGEST_SUFFIX = ".sha256"
LOG_SUFFIX = ".log"


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. GITALL_CONFIG environment variable
    2. ~/.gitall/ directory
    """
    # Check for environment variable override
    if 'GITALL_CONFIG' in os.environ:
        path = Path(os.environ['GITALL_CONFIG']).expanduser()
        if path.exists():
            return path

    gitall_dir = Path.home() / '.gitall'
    for filename in ['config.json', 'config.toml', 'config.yaml', 'config.yml']:
        path = gitall_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path
    return gitall_dir / 'config.json'


def get_default_config():
    """Get default configuration."""
    return {
        "general": {
            "database": "~/.gitall.db",
            "git_binary": "git",
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s"
        },
    }


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    suffix = config_path.suffix.lower()
    if suffix == '.toml':
        with open(config_path, 'rb') as f:
            return tomllib.load(f)
    if suffix in ['.yaml', '.yml']:
        with open(config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    # Default to JSON format
    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_config():
    """Load configuration from file.

    Defaults are merged with the config file (if any), then
    GITALL_* environment overrides are applied.
    """
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        try:
            file_config = _read_config_file(config_path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config from {config_path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        logger.debug(f"Loaded config from {config_path}")

        # Merge file config with defaults
        config = merge_configs(config, file_config)

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: GITALL_SECTION_KEY
    For example: GITALL_GENERAL_DATABASE=/tmp/repos.db
    """
    env_prefix = "GITALL_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        # Convert value
        if value.lower() in ('true', '1', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', '0', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts_from_key = config_key.split('_')
                if key_parts[i : i + len(config_key_parts_from_key)] == config_key_parts_from_key:
                    if len(config_key_parts_from_key) > best_match_len:
                        best_match_len = len(config_key_parts_from_key)
                        matched_key = config_key

            if matched_key:
                # If we are at the end of the env var, we have found the key to set
                if i + best_match_len == len(key_parts):
                    current_level[matched_key] = typed_value
                    break

                # Otherwise, we descend into the dictionary
                if isinstance(current_level[matched_key], dict):
                    current_level = current_level[matched_key]
                    i += best_match_len
                else:
                    # Path conflict, e.g., env var is longer but we found a non-dict value
                    break
            else:
                # No match found
                break

    return config


@dataclass(frozen=True)
class GitallConfig:
    """
    Resolved locations and settings for one gitall invocation.

    Built once at the CLI entry point and handed to the registry,
    log and runner; none of them read configuration on their own.
    """
    registry_path: Path
    digest_path: Path
    log_path: Path
    git_binary: str = "git"

    @classmethod
    def for_database(cls, database, git_binary: str = "git") -> "GitallConfig":
        """Derive the digest and log paths from the registry base path."""
        base = Path(os.path.abspath(os.path.expanduser(str(database))))
        return cls(
            registry_path=base,
            digest_path=base.with_name(base.name + DIGEST_SUFFIX),
            log_path=base.with_name(base.name + LOG_SUFFIX),
            git_binary=git_binary,
        )

    @classmethod
    def from_dict(cls, config: Dict[str, Any], database: Optional[str] = None) -> "GitallConfig":
        """
        Build from a loaded configuration dict.

        Args:
            config: Result of load_config()
            database: Explicit registry path (e.g. --db), wins over config

        Returns:
            GitallConfig
        """
        general = config.get("general", {})
        if not isinstance(general, dict):
            raise ConfigError("general must be a mapping of settings")
        if database is None:
            database = general.get("database") or "~/.gitall.db"
        git_binary = general.get("git_binary") or "git"
        if not isinstance(database, str) or not isinstance(git_binary, str):
            raise ConfigError("general.database and general.git_binary must be strings")
        return cls.for_database(database, git_binary=git_binary)
