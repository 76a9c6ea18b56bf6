#!/usr/bin/env python3

import os
import json
import tomllib
import logging
import sys
from pathlib import Path

import toml
import yaml

logger = logging.getLogger("gitmeta")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def configure_logging(config=None):
    """Configure the root logger from the logging section of the config.

    Log records go to stderr so stdout stays clean for data.
    """
    logging_config = (config or get_default_config()).get("logging", {})
    level = logging_config.get("level", "WARNING")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format=logging_config.get("format", "%(levelname)s: %(message)s"),
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
    )


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. GITMETA_CONFIG environment variable
    2. ~/.gitmeta/ directory
    """
    if 'GITMETA_CONFIG' in os.environ:
        path = Path(os.environ['GITMETA_CONFIG'])
        if path.exists():
            return path

    gitmeta_dir = Path.home() / '.gitmeta'
    for filename in CONFIG_FILENAMES:
        path = gitmeta_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path for saving
    return gitmeta_dir / 'config.json'


def load_config():
    """Load configuration from file."""
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    if config_path.exists():
        try:
            if config_path.suffix.lower() == '.toml':
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f) or {}
            else:
                with open(config_path, 'r') as f:
                    file_config = json.load(f)

            config = merge_configs(config, file_config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    return apply_env_overrides(config)


def save_config(config, config_path=None):
    """Save configuration to file.

    The file format follows the suffix of the target path: TOML, YAML,
    or JSON for anything else.
    """
    config_path = Path(config_path) if config_path else get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    if config_path.suffix.lower() == '.toml':
        # tomllib is read-only
        with open(config_path, 'w') as f:
            toml.dump(config, f)
    elif config_path.suffix.lower() in ['.yaml', '.yml']:
        with open(config_path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False)
    else:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def get_default_config():
    """Get default configuration."""
    return {
        "git": {
            "binary": "git",
            "remote": "origin",
            "timeout_seconds": 30,
            "short_hash_length": 8,
            "parallel_queries": 1,
            "deadline_seconds": 0
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s"
        },
        "output": {
            "format": "jsonl"
        }
    }


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
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: GITMETA_SECTION_KEY
    For example: GITMETA_GIT_TIMEOUT_SECONDS=10
    """
    env_prefix = "GITMETA_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == "GITMETA_CONFIG":
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
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
                config_key_parts = config_key.split('_')
                if key_parts[i:i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if not matched_key:
                break

            if i + best_match_len == len(key_parts):
                current_level[matched_key] = typed_value
                break

            if isinstance(current_level[matched_key], dict):
                current_level = current_level[matched_key]
                i += best_match_len
            else:
                # Env var is longer than the config path it matched
                break

    return config
