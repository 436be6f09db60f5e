"""Configuration management for batchexec.

Supplies the defaults a BatchExec host seeds its attributes from.

Config resolution order (highest priority first):
1. Programmatic (BatchExecConfig constructed in code, or configure())
2. Environment variables (BATCHEXEC_FATAL, BATCHEXEC_ECHO, ...)
3. Config file (~/.config/batchexec/config.json)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "batchexec"
CONFIG_FILE = CONFIG_DIR / "config.json"

ENV_PREFIX = "BATCHEXEC_"

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def parse_flag(value: str) -> int:
    """Parse an env/config flag string into 0 or 1.

    Raises:
        ValueError: If the string is not a recognised boolean.
    """
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return 1
    if text in _FALSE_STRINGS:
        return 0
    raise ValueError(f"Invalid boolean flag: {value!r}")


# =============================================================================
# Config dataclass
# =============================================================================


@dataclass
class BatchExecConfig:
    """Top-level batchexec configuration.

    Flags are stored as 0/1 to match the boolean attributes they seed.

    Examples:
        # Package use: no files needed
        config = BatchExecConfig(fatal=0, echo=1)

        # CLI use: loads from ~/.config/batchexec/config.json + env
        config = BatchExecConfig.load()
    """

    fatal: int = 1
    echo: int = 0
    autoheader: int = 0
    leader: str = "#"
    maxlen: int = 30
    log_level: str = "WARNING"

    @classmethod
    def load(cls) -> "BatchExecConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: config file
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: env var overrides
        _apply_env(config)

        return config

    def save(self) -> None:
        """Save config to ~/.config/batchexec/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return asdict(self)


_FLAG_FIELDS = {"fatal", "echo", "autoheader"}
_INT_FIELDS = {"maxlen"}


def _coerce(key: str, value: Any) -> Any:
    if key in _FLAG_FIELDS:
        return value if isinstance(value, int) and value in (0, 1) else parse_flag(value)
    if key in _INT_FIELDS:
        return int(value)
    return str(value)


def _apply_dict(config: BatchExecConfig, data: dict) -> None:
    """Apply values from a config-file dict, ignoring unknown keys."""
    known = {f.name for f in fields(config)}
    for key, value in data.items():
        if key not in known:
            logger.warning("Unknown config key %r in %s, ignoring", key, CONFIG_FILE)
            continue
        try:
            setattr(config, key, _coerce(key, value))
        except ValueError:
            logger.warning("Invalid config value %s=%r, ignoring", key, value)


def _apply_env(config: BatchExecConfig) -> None:
    for f in fields(config):
        env_var = ENV_PREFIX + f.name.upper()
        if (val := os.environ.get(env_var)) is None or val == "":
            continue
        try:
            setattr(config, f.name, _coerce(f.name, val))
        except ValueError:
            logger.warning("Invalid %s=%r, ignoring", env_var, val)


# =============================================================================
# Global config singleton
# =============================================================================

_config: BatchExecConfig | None = None


def get_config() -> BatchExecConfig:
    """Get the global BatchExecConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = BatchExecConfig.load()
    return _config


def configure(config: BatchExecConfig) -> None:
    """Set the global BatchExecConfig programmatically.

    Use this when batchexec is used as a package:
        from batchexec.config import configure, BatchExecConfig
        configure(BatchExecConfig(fatal=0))
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
