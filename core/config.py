"""
Configuration loading: config.yaml via PyYAML, with .env / environment overrides
for the values most often changed per machine (log level, app name).
"""
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

ENV_LOG_LEVEL = "FILE_DATA_LOG_LEVEL"
ENV_APP_NAME = "FILE_DATA_APP_NAME"


def load_config(config_path: str | Path, env_file: str | Path | None = None) -> dict[str, Any]:
    """Read config.yaml and apply environment overrides.

    `.env` next to the config file (or `env_file`) is loaded first; variables
    already set in the environment win.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    load_dotenv(env_file if env_file is not None else path.parent / ".env")

    with open(path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Config must be a mapping: {config_path}")
    return apply_env_overrides(config)


def apply_env_overrides(config: dict[str, Any], environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    env = os.environ if environ is None else environ

    log_level = env.get(ENV_LOG_LEVEL)
    if log_level:
        _section(config, "system")["log_level"] = log_level

    app_name = env.get(ENV_APP_NAME)
    if app_name:
        _section(config, "data_store")["app_name"] = app_name

    return config


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name)
    if not isinstance(section, dict):
        section = {}
        config[name] = section
    return section
