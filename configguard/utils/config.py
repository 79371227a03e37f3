"""
Configuration management for ConfigGuard
Handles persisted classifier and gate settings
"""
import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from configguard.utils.logger import get_logger

logger = get_logger(__name__)

# Settings that may be reset to None from the command line
OPTIONAL_KEYS = ("patterns_file",)


@dataclass
class ConfigGuardConfig:
    """ConfigGuard configuration"""
    max_value_length: int = 10_000
    entropy_cache_size: int = 1000
    check_gitignore: bool = True
    default_report_format: str = "text"
    log_level: str = "INFO"
    patterns_file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConfigGuardConfig':
        """Create from dictionary, skipping unknown keys and ill-typed values"""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                continue
            try:
                values[key] = _validate(key, value)
            except ValueError as e:
                logger.warning(f"Ignoring config value {key}={value!r}: {e}")
        return cls(**values)


class ConfigManager:
    """Manages ConfigGuard configuration"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager

        Args:
            config_path: Path to config file (defaults to ~/.configguard/config.json)
        """
        if config_path is None:
            config_path = Path.home() / ".configguard" / "config.json"

        self.config_path = Path(config_path)
        self._config: Optional[ConfigGuardConfig] = None

    def load(self) -> ConfigGuardConfig:
        """Load configuration from file"""
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            self._config = ConfigGuardConfig()
            return self._config

        try:
            with open(self.config_path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise TypeError(f"expected a JSON object, got {type(data).__name__}")
            self._config = ConfigGuardConfig.from_dict(data)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Ignoring unreadable config file {self.config_path}: {e}")
            self._config = ConfigGuardConfig()
        return self._config

    def save(self, config: Optional[ConfigGuardConfig] = None) -> None:
        """
        Save configuration to file

        Args:
            config: Configuration to save (uses current if None)
        """
        if config is not None:
            self._config = config

        if self._config is None:
            raise ValueError("No configuration to save")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w') as f:
            json.dump(self._config.to_dict(), f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        config = self.load()
        return getattr(config, key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value"""
        self.update(**{key: value})

    def update(self, **kwargs) -> None:
        """Update multiple configuration values"""
        config = self.load()
        for key, value in kwargs.items():
            if not hasattr(config, key):
                raise KeyError(f"Invalid config key: {key}")
            setattr(config, key, _validate(key, value))
        self.save(config)

    def clear(self) -> None:
        """Reset all configuration to defaults"""
        self._config = ConfigGuardConfig()
        self.save()


def _coerce(key: str, current: Any, value: Any) -> Any:
    """Convert CLI strings to the type of the current setting."""
    if not isinstance(value, str):
        return value
    if isinstance(current, bool):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"Expected a boolean, got {value!r}")
    if isinstance(current, int):
        return int(value)
    if key in OPTIONAL_KEYS and value.strip().lower() in ("", "none", "null"):
        return None
    return value


def _validate(key: str, value: Any) -> Any:
    """Coerce ``value`` for setting ``key`` and reject values of the wrong type."""
    default = _DEFAULTS[key]
    value = _coerce(key, default, value)
    if value is None and key in OPTIONAL_KEYS:
        return None
    expected = str if default is None else type(default)
    # bool is a subclass of int, so compare exact types
    if type(value) is not expected:
        raise ValueError(f"Expected {expected.__name__}, got {type(value).__name__}")
    return value


_DEFAULTS = {f.name: f.default for f in fields(ConfigGuardConfig)}
