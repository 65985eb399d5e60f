"""Config file support for jfeed.

Loads default CLI arguments from:
  1. ~/.jfeed.yaml  (user-level)
  2. ./jfeed.yaml   (project-level, overrides user-level)

Example config file:

    # ~/.jfeed.yaml
    format: json
    indent: 4
    timeout: 30
    quiet: true
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

_BOOL_FIELDS = {"verbose", "quiet", "compact"}
_INT_FIELDS = {"indent", "timeout", "retries", "width"}
_STR_FIELDS = {"format", "output"}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def config_paths() -> list:
    return [
        Path.home() / ".jfeed.yaml",
        Path.home() / ".jfeed.yml",
        Path("jfeed.yaml"),
        Path("jfeed.yml"),
    ]


def load_config() -> Dict[str, Any]:
    """Load config from YAML files, merging user + project level."""
    config: Dict[str, Any] = {}

    for p in config_paths():
        if not p.is_file():
            continue
        try:
            with open(p, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"[Config] Failed to load {p}: {e}")
            continue
        if isinstance(data, dict):
            # Normalize keys: dashes -> underscores
            config.update({str(k).replace("-", "_"): v for k, v in data.items()})
            logger.debug(f"[Config] Loaded {p}")
        else:
            logger.warning(f"[Config] Ignoring {p}: top level is not a mapping")

    return config


def load_env_config() -> Dict[str, Any]:
    """Load config from JFEED_* environment variables.

    Maps JFEED_FORMAT=json -> format=json, JFEED_TIMEOUT=30 -> timeout=30, etc.
    Boolean vars: JFEED_QUIET=1, JFEED_COMPACT=true, etc.
    """
    prefix = "JFEED_"
    config: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        field = key[len(prefix):].lower()
        if field in _BOOL_FIELDS:
            config[field] = _as_bool(value)
        elif field in _INT_FIELDS:
            try:
                config[field] = int(value)
            except ValueError:
                logger.warning(f"[Config] Ignoring {key}={value!r}: not an integer")
        elif field in _STR_FIELDS:
            config[field] = value
    return config


def apply_config_defaults(parser, args):
    """Apply config defaults to unset CLI args (CLI always wins).

    Priority: CLI flags > env vars (JFEED_*) > config files > parser defaults.
    """
    config = load_config()
    config.update(load_env_config())
    if not config:
        return args

    for key, value in config.items():
        if not hasattr(args, key):
            continue
        if getattr(args, key) != parser.get_default(key):
            continue  # set explicitly on the command line

        try:
            if key in _BOOL_FIELDS:
                setattr(args, key, _as_bool(value))
            elif key in _INT_FIELDS:
                setattr(args, key, int(value))
            elif key in _STR_FIELDS:
                setattr(args, key, str(value))
        except (TypeError, ValueError):
            logger.warning(f"[Config] Ignoring {key}={value!r}: wrong type")

    return args


_STARTER_CONFIG = """\
# jfeed configuration. CLI flags always override these values.

# Output format: console, json, summary
# format: console

# JSON indentation (ignored with compact: true)
# indent: 2
# compact: false

# Network settings for URL sources
# timeout: 15
# retries: 2

# Console width for the rendered view
# width: 100

# Suppress status messages
# quiet: false
"""


def generate_starter_config() -> Path:
    """Write a starter config file to ~/.jfeed.yaml (won't overwrite existing)."""
    path = Path.home() / ".jfeed.yaml"
    if path.exists():
        path = Path.home() / ".jfeed.yaml.new"
    path.write_text(_STARTER_CONFIG, encoding="utf-8")
    return path
