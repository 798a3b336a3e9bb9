"""Library-wide validation settings.

Settings come from built-in defaults, then an optional dictionary or
YAML/JSON file, then environment variables of the form
``VALIDKNOBS_<SETTING>`` (for example ``VALIDKNOBS_LOG_FAILURES=true``).

Settings attributes:
    - slice_internal_errors: ``"trap"`` records an ``InternalError`` raised
      for one element of a slice binding like any other element error;
      ``"propagate"`` returns it from the slice predicate immediately so
      the schema aborts.
    - log_failures: When true, schemas log every failing field at DEBUG.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # type: ignore[import-untyped]

from validknobs_common.exceptions import ConfigurationError, NotFoundError

logger = logging.getLogger(__name__)

SLICE_TRAP = "trap"
SLICE_PROPAGATE = "propagate"

DEFAULTS: Dict[str, Any] = {
    "slice_internal_errors": SLICE_TRAP,
    "log_failures": False,
}


class ValidationSettings:
    """Holds validated settings with environment overrides applied last."""

    ENV_PREFIX = "VALIDKNOBS_"

    def __init__(
        self,
        settings: Dict[str, Any] | None = None,
        use_env: bool = True,
        prefix: str | None = None,
    ) -> None:
        """Initialize settings.

        Args:
            settings: Values overriding the defaults
            use_env: Whether to apply environment variable overrides
            prefix: Custom environment variable prefix (default: VALIDKNOBS_)
        """
        self.prefix = prefix or self.ENV_PREFIX
        self._settings: Dict[str, Any] = copy.deepcopy(DEFAULTS)

        if settings:
            self.load_settings(settings)

        if use_env:
            self._apply_environment_overrides()

    @classmethod
    def from_file(cls, path: Union[str, Path], use_env: bool = True) -> "ValidationSettings":
        """Create settings from a YAML or JSON file.

        A top-level ``settings`` key is unwrapped if present.

        Raises:
            NotFoundError: If the file does not exist
            ConfigurationError: If the format is unsupported or the content invalid
        """
        path = Path(path).resolve()
        if not path.exists():
            raise NotFoundError(f"Settings file not found: {path}", context={"path": str(path)})

        suffix = path.suffix.lower()
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f) or {}
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported settings file format: {suffix}",
                    context={"path": str(path)},
                )

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Settings file must contain a mapping, got {type(data).__name__}",
                context={"path": str(path)},
            )

        logger.info(f"Loading validation settings from {path}")
        return cls(data.get("settings", data), use_env=use_env)

    def load_settings(self, settings: Dict[str, Any]) -> None:
        """Merge a dictionary of settings over the current values."""
        for key, value in settings.items():
            self.set_setting(key, value)

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self._settings.get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        """Set one setting after checking it.

        Raises:
            ConfigurationError: If the key is unknown or the value invalid
        """
        self._settings[key] = self._check(key, value)

    @property
    def slice_internal_errors(self) -> str:
        return self._settings["slice_internal_errors"]

    @property
    def propagate_slice_internal_errors(self) -> bool:
        return self._settings["slice_internal_errors"] == SLICE_PROPAGATE

    @property
    def log_failures(self) -> bool:
        return self._settings["log_failures"]

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._settings)

    def _check(self, key: str, value: Any) -> Any:
        if key not in DEFAULTS:
            raise ConfigurationError(
                f"Unknown validation setting: {key}",
                context={"key": key, "known": sorted(DEFAULTS)},
            )

        if key == "slice_internal_errors":
            if not isinstance(value, str) or value.lower() not in (SLICE_TRAP, SLICE_PROPAGATE):
                raise ConfigurationError(
                    f"slice_internal_errors must be '{SLICE_TRAP}' or '{SLICE_PROPAGATE}'",
                    context={"key": key, "value": value},
                )
            return value.lower()

        if not isinstance(value, bool):
            raise ConfigurationError(
                f"{key} must be a boolean",
                context={"key": key, "value": value},
            )
        return value

    def _apply_environment_overrides(self) -> None:
        for env_key, raw in os.environ.items():
            if not env_key.startswith(self.prefix):
                continue

            key = env_key[len(self.prefix) :].lower()
            if key not in DEFAULTS:
                continue

            logger.debug(f"Applying environment override {env_key}")
            self.set_setting(key, self._parse_value(raw))

    def _parse_value(self, value: str) -> Any:
        """Parse an environment variable value to bool, int, float or str."""
        if value.lower() in ["true", "yes", "1"]:
            return True
        elif value.lower() in ["false", "no", "0"]:
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value


_settings: ValidationSettings | None = None


def get_settings() -> ValidationSettings:
    """Return the process-wide settings, creating them on first use."""
    global _settings
    if _settings is None:
        _settings = ValidationSettings()
    return _settings


def reset_settings(settings: ValidationSettings | None = None) -> None:
    """Replace the process-wide settings; ``None`` reloads defaults on next use."""
    global _settings
    _settings = settings


__all__ = [
    "SLICE_TRAP",
    "SLICE_PROPAGATE",
    "DEFAULTS",
    "ValidationSettings",
    "get_settings",
    "reset_settings",
]
