"""Pattern catalogs used by the secret classifier.

The catalogs are loaded from a YAML file (``config/patterns.yaml`` by default)
and compiled once into ordered tuples of :class:`PatternEntry`. Lists are
scanned top to bottom and the first matching entry wins.
"""

import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from configguard.core.exceptions import ConfigurationError
from configguard.core.models import Confidence, PatternEntry

DEFAULT_PATTERNS_FILE = Path(__file__).parent.parent / "config" / "patterns.yaml"

_SECTIONS = ("exclusions", "certificates", "signatures")


def _compile_entry(section: str, row: Dict[str, Any]) -> PatternEntry:
    """Compile one YAML row into a PatternEntry."""
    try:
        name = row["name"]
        source = row["pattern"]
    except (KeyError, TypeError):
        raise ConfigurationError(
            f"Invalid entry in '{section}': every row needs 'name' and 'pattern'",
            details={"section": section, "row": row},
        )

    flags = re.IGNORECASE if row.get("ignore_case") else 0
    try:
        pattern = re.compile(source, flags)
    except re.error as e:
        raise ConfigurationError(
            f"Invalid regular expression for '{name}': {e}",
            details={"section": section, "name": name},
        )

    try:
        confidence = Confidence(row.get("confidence", Confidence.HIGH.value))
    except ValueError:
        raise ConfigurationError(
            f"Invalid confidence for '{name}': {row.get('confidence')!r}",
            details={"section": section, "name": name},
        )

    return PatternEntry(pattern=pattern, type=name, confidence=confidence)


class PatternCatalog:
    """Exclusion, certificate/key and known-signature catalogs."""

    def __init__(
        self,
        exclusions: Tuple[PatternEntry, ...] = (),
        certificates: Tuple[PatternEntry, ...] = (),
        signatures: Tuple[PatternEntry, ...] = (),
    ):
        self.exclusions = tuple(exclusions)
        self.certificates = tuple(certificates)
        self.signatures = tuple(signatures)

    @classmethod
    def load(cls, patterns_file: Union[str, Path]) -> "PatternCatalog":
        """Load and compile catalogs from a YAML file."""
        try:
            with open(patterns_file, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load patterns file: {e}")

        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Patterns file {patterns_file} must contain a mapping at the top level"
            )

        compiled: Dict[str, List[PatternEntry]] = {}
        for section in _SECTIONS:
            rows = config.get(section) or []
            if not isinstance(rows, list):
                raise ConfigurationError(f"Section '{section}' must be a list")
            compiled[section] = [_compile_entry(section, row) for row in rows]

        return cls(
            exclusions=tuple(compiled["exclusions"]),
            certificates=tuple(compiled["certificates"]),
            signatures=tuple(compiled["signatures"]),
        )

    @staticmethod
    def first_match(entries: Tuple[PatternEntry, ...], value: str) -> Optional[PatternEntry]:
        """Return the first entry matching ``value``."""
        for entry in entries:
            if entry.matches(value):
                return entry
        return None

    def match_exclusion(self, value: str) -> Optional[PatternEntry]:
        return self.first_match(self.exclusions, value)

    def match_certificate(self, value: str) -> Optional[PatternEntry]:
        return self.first_match(self.certificates, value)

    def match_signature(self, value: str) -> Optional[PatternEntry]:
        return self.first_match(self.signatures, value)

    def __len__(self) -> int:
        return len(self.exclusions) + len(self.certificates) + len(self.signatures)


@lru_cache(maxsize=None)
def default_catalog() -> PatternCatalog:
    """The packaged catalog, compiled on first use and shared afterwards."""
    return PatternCatalog.load(DEFAULT_PATTERNS_FILE)
