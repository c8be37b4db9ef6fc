# File: src/codec_config.py

"""
Configuration loader for the mnemonic codec.

Loads defaults from bip39_codec.json (project root, working directory, or the
path in $BIP39_CODEC_CONFIG), with hardcoded fallbacks.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

CONFIG_FILENAME = "bip39_codec.json"
CONFIG_ENV_VAR = "BIP39_CODEC_CONFIG"

# Hardcoded fallback defaults
FALLBACK_DEFAULTS = {
    "language": "english",
    "mode": "standard",
    "missing_word_marker": "_",
    "max_missing_words": 2,
}

_config: Optional[Dict[str, Any]] = None


def _find_config() -> Optional[Path]:
    """Find the config file: explicit env path first, then walk up from this file."""
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit) if Path(explicit).exists() else None

    paths = [
        Path(__file__).parent.parent / CONFIG_FILENAME,  # src -> root
        Path.cwd() / CONFIG_FILENAME,
    ]
    for path in paths:
        if path.exists():
            return path
    return None


def load() -> Dict[str, Any]:
    """Load configuration from the config file or use fallbacks."""
    global _config
    if _config is not None:
        return _config

    config_path = _find_config()
    if config_path:
        try:
            with open(config_path, encoding="utf-8") as f:
                _config = json.load(f)
                log.debug("loaded codec config from %s", config_path)
                return _config
        except (json.JSONDecodeError, OSError) as exc:
            log.warning("ignoring unreadable config %s: %s", config_path, exc)

    # Fallback
    _config = {"defaults": dict(FALLBACK_DEFAULTS)}
    return _config


def reset() -> None:
    """Forget the cached configuration so the next access reloads it."""
    global _config
    _config = None


def get_default(key: str, fallback: Any = None) -> Any:
    """Get a default value from config."""
    cfg = load()
    return cfg.get("defaults", {}).get(key, fallback)


# Convenience accessors
def default_language() -> str:
    return get_default("language", FALLBACK_DEFAULTS["language"])


def default_mode() -> str:
    return get_default("mode", FALLBACK_DEFAULTS["mode"])


def missing_word_marker() -> str:
    return get_default("missing_word_marker", FALLBACK_DEFAULTS["missing_word_marker"])


def max_missing_words() -> int:
    return int(get_default("max_missing_words", FALLBACK_DEFAULTS["max_missing_words"]))
