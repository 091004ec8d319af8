"""Diagnostics configuration from YAML file.

Loads the ``diagnostics:`` section of a YAML file into a DiagnosticsConfig:
- Logging level and output format
- Stack capture depth
- HTTP error-body truncation length

Environment variables ARE supported using ${VAR_NAME} syntax in YAML files,
and DIAGERRORS_LOG_LEVEL / DIAGERRORS_JSON_LOGS override the file values.
"""

import logging
import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_ERROR_BODY_MAX_LENGTH = 256

_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::-(([^}]*))?)?\}")
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load YAML file and return dict."""
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR_NAME} and ${VAR_NAME:-default} in config data."""
    if isinstance(data, dict):
        return {key: _expand_env_vars(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):

        def replacer(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else match.group(0)
            return os.getenv(var_name, default_value)

        return _ENV_PATTERN.sub(replacer, data)
    else:
        return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass
class DiagnosticsConfig:
    """Runtime settings for error capture and diagnostic logging.

    Configuration structure:
        diagnostics:
          log_level: INFO
          json_logs: true
          max_stack_depth: 64          # omit or null for unlimited
          error_body_max_length: 256   # bytes of HTTP error body kept
    """

    log_level: str = "INFO"
    json_logs: bool = False
    max_stack_depth: Optional[int] = None
    error_body_max_length: int = DEFAULT_ERROR_BODY_MAX_LENGTH

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        self.json_logs = _as_bool(self.json_logs)
        if self.max_stack_depth is not None:
            self.max_stack_depth = int(self.max_stack_depth)
            if self.max_stack_depth <= 0:
                raise ValueError(
                    f"max_stack_depth must be positive, got {self.max_stack_depth}"
                )
        self.error_body_max_length = int(self.error_body_max_length)
        if self.error_body_max_length < 0:
            raise ValueError(
                f"error_body_max_length must be >= 0, got {self.error_body_max_length}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiagnosticsConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(
                "Ignoring unknown diagnostics config keys: %s", ", ".join(sorted(unknown))
            )
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(path: Optional[Path] = None) -> DiagnosticsConfig:
    """
    Load DiagnosticsConfig from a YAML file with environment overrides.

    A missing file yields the defaults.

    Args:
        path: Path to YAML file (None = defaults plus environment)

    Returns:
        DiagnosticsConfig
    """
    data: Dict[str, Any] = {}
    if path is not None:
        raw = _expand_env_vars(load_yaml(Path(path)))
        data = dict(raw.get("diagnostics") or {})

    if os.getenv("DIAGERRORS_LOG_LEVEL"):
        data["log_level"] = os.environ["DIAGERRORS_LOG_LEVEL"]
    if os.getenv("DIAGERRORS_JSON_LOGS"):
        data["json_logs"] = os.environ["DIAGERRORS_JSON_LOGS"]

    return DiagnosticsConfig.from_dict(data)


_active_config = DiagnosticsConfig()


def configure(config: DiagnosticsConfig) -> None:
    """Install ``config`` as the process-wide active configuration."""
    global _active_config
    _active_config = config


def get_config() -> DiagnosticsConfig:
    return _active_config


__all__ = [
    "DEFAULT_ERROR_BODY_MAX_LENGTH",
    "DiagnosticsConfig",
    "configure",
    "get_config",
    "load_config",
    "load_yaml",
]
