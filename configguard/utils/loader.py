"""Load configuration-variables trees from files."""

import json
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from dotenv import dotenv_values

from configguard.core.exceptions import ConfigurationError
from configguard.utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml", ".toml", ".env")


def _is_env_file(path: Path) -> bool:
    return path.suffix == ".env" or path.name == ".env" or path.name.startswith(".env.")


def load_variables(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a variables tree from a JSON, YAML, TOML or dotenv file.

    Args:
        path: File to read

    Returns:
        Top-level mapping of the file

    Raises:
        ConfigurationError: if the file is missing, unsupported or malformed
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Variables file not found: {path}", details={"path": str(path)})

    suffix = path.suffix.lower()
    try:
        if _is_env_file(path):
            data: Any = dict(dotenv_values(path))
        elif suffix == ".json":
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        elif suffix in (".yaml", ".yml"):
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        elif suffix == ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
        else:
            raise ConfigurationError(
                f"Unsupported variables file type '{suffix or path.name}'. "
                f"Expected one of: {', '.join(SUPPORTED_SUFFIXES)}",
                details={"path": str(path)},
            )
    except (json.JSONDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to parse {path}: {e}", details={"path": str(path)})

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{path} must contain a mapping at the top level, got {type(data).__name__}",
            details={"path": str(path)},
        )

    logger.debug(f"Loaded {len(data)} top-level variable(s) from {path}")
    return data
