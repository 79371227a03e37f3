"""Secret classifier for configuration key/value pairs.

Rules run in a fixed order and the first definitive rule wins:

1. blank, non-string and very short values are rejected
2. repetitive content is rejected
3. context detectors (URL parameters, connection strings)
4. exclusion catalog
5. certificate/key markers, then known vendor signatures
6. key-name keywords
7. statistical fallbacks (entropy, long alphanumeric, hex, base64, UUID-like,
   mixed complexity, known prefixes)

Context detectors run before the exclusion catalog so that a credential inside
an ``https://`` URL is not discarded just because the value looks like a URL.
"""

import base64
import binascii
import re
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from configguard.core.context import (
    detect_connection_string_secret,
    detect_url_parameter_secret,
)
from configguard.core.entropy import DEFAULT_CACHE_SIZE, EntropyAnalyzer, character_complexity
from configguard.core.keywords import has_secret_keyword
from configguard.core.models import Confidence, DetectionVerdict
from configguard.core.patterns import PatternCatalog, default_catalog
from configguard.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_VALUE_LENGTH = 10_000
MIN_VALUE_LENGTH = 4

_RE_TEST_WORDS = re.compile(r"test|example|demo|placeholder|sample")
_RE_LONG_ALPHANUMERIC = re.compile(r"^[A-Za-z0-9_+=/\-]+$")
_RE_WHITESPACE = re.compile(r"\s")
_RE_HEX = re.compile(r"^[0-9a-fA-F]+$")
_RE_EXTENDED_UUID = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}[0-9a-fA-F]+$"
)

COMMON_HASH_LENGTHS = (32, 40, 56, 64, 96, 128)

# (prefix, minimum length, confidence)
SECRET_PREFIXES: Tuple[Tuple[str, int, Confidence], ...] = (
    ("sk_", 16, Confidence.HIGH),
    ("pk_", 16, Confidence.MEDIUM),
    ("rk_", 16, Confidence.HIGH),
    ("xoxb-", 20, Confidence.HIGH),
    ("xoxp-", 20, Confidence.HIGH),
    ("ghp_", 20, Confidence.HIGH),
    ("gho_", 20, Confidence.HIGH),
    ("AIza", 20, Confidence.HIGH),
)


def _not_secret(reason: str, confidence: Confidence = Confidence.HIGH,
                category: Optional[str] = None) -> DetectionVerdict:
    return DetectionVerdict(is_secret=False, reason=reason, confidence=confidence, category=category)


def _secret(reason: str, confidence: Confidence, category: str) -> DetectionVerdict:
    return DetectionVerdict(is_secret=True, reason=reason, confidence=confidence, category=category)


def entropy_threshold(length: int) -> float:
    """Entropy a value of ``length`` characters must reach to look random."""
    if length >= 64:
        return 4.7
    if length >= 32:
        return 4.2
    return 3.8


def is_base64_round_trip(value: str) -> bool:
    """True if ``value`` decodes as base64 and re-encodes to itself."""
    try:
        decoded = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return base64.b64encode(decoded).decode("ascii") == value


class SecretDetector:
    """
    Decides whether a configuration value is potentially a secret.

    The detector is stateless apart from the entropy cache owned by its
    :class:`EntropyAnalyzer`, which is lock-protected, so a single instance
    can be shared between threads.
    """

    def __init__(
        self,
        catalog: Optional[PatternCatalog] = None,
        analyzer: Optional[EntropyAnalyzer] = None,
        patterns_file: Optional[Union[str, Path]] = None,
        max_value_length: int = DEFAULT_MAX_VALUE_LENGTH,
    ):
        """
        Initialize the detector.

        Args:
            catalog: Compiled pattern catalogs (defaults to the packaged ones)
            analyzer: Entropy analyzer owning the memoization cache
            patterns_file: YAML catalog to load when ``catalog`` is not given
            max_value_length: Values are truncated to this many characters
        """
        if catalog is None:
            catalog = PatternCatalog.load(patterns_file) if patterns_file else default_catalog()
        self.catalog = catalog
        self.analyzer = analyzer or EntropyAnalyzer()
        self.max_value_length = max_value_length

    @classmethod
    def from_config(cls, config: Any) -> "SecretDetector":
        """Build a detector from a :class:`ConfigGuardConfig`."""
        return cls(
            analyzer=EntropyAnalyzer(
                max_cache_size=getattr(config, "entropy_cache_size", DEFAULT_CACHE_SIZE)
            ),
            patterns_file=getattr(config, "patterns_file", None),
            max_value_length=getattr(config, "max_value_length", DEFAULT_MAX_VALUE_LENGTH),
        )

    def clear_cache(self) -> None:
        self.analyzer.clear_cache()

    def is_potentially_a_secret(self, key: Any, value: Any) -> DetectionVerdict:
        """
        Classify a single key/value pair.

        Never raises: every input maps to a verdict.

        Args:
            key: Field name the value was found under
            value: Candidate value (anything; only strings can be secrets)

        Returns:
            DetectionVerdict describing the decision
        """
        key = "" if key is None else str(key)
        verdict = self._classify(key, value)
        logger.debug(
            f"Classified '{key}': secret={verdict.is_secret} "
            f"confidence={verdict.confidence.value} ({verdict.category or verdict.reason})"
        )
        return verdict

    def _classify(self, key: str, value: Any) -> DetectionVerdict:
        if not isinstance(value, str) or not value.strip():
            return _not_secret("Empty or non-string value")

        trimmed = value.strip()
        if len(trimmed) > self.max_value_length:
            logger.debug(
                f"Truncating {len(trimmed)}-char value for '{key}' to {self.max_value_length}"
            )
            trimmed = trimmed[: self.max_value_length]
        length = len(trimmed)

        if length < MIN_VALUE_LENGTH:
            return _not_secret("Value too short")

        analyzer = self.analyzer
        if length >= 20 and analyzer.has_very_low_entropy(trimmed):
            return _not_secret("Repetitive or low-entropy content")

        # Context detectors
        verdict = detect_url_parameter_secret(trimmed, analyzer)
        if verdict is not None:
            return verdict

        verdict = detect_connection_string_secret(trimmed, analyzer)
        if verdict is not None:
            return verdict

        # Catalogs
        entry = self.catalog.match_exclusion(trimmed)
        if entry is not None:
            return _not_secret("Matches common non-secret pattern", category=entry.type)

        entry = self.catalog.match_certificate(trimmed) or self.catalog.match_signature(trimmed)
        if entry is not None:
            return _secret(f"Matches {entry.type} pattern", entry.confidence, entry.type)

        # Keyword rule
        keyword = has_secret_keyword(key)
        if keyword and length >= 8:
            if _RE_TEST_WORDS.search(trimmed.lower()):
                return _not_secret("Contains test/demo/example keywords", Confidence.MEDIUM)
            return _secret(
                f"Secret keyword '{key}' with {length}-char value",
                Confidence.HIGH,
                "Keyword-based detection",
            )

        return self._statistical_rules(trimmed, length, keyword)

    def _statistical_rules(self, value: str, length: int, keyword: bool) -> DetectionVerdict:
        """Fallback heuristics for values no pattern or keyword decided."""
        analyzer = self.analyzer
        entropy = analyzer.entropy(value)
        complexity = character_complexity(value)

        if length >= 12 and entropy >= entropy_threshold(length) and complexity >= 2:
            return _secret(
                f"High entropy ({entropy:.2f}) with character complexity in {length}-char string",
                Confidence.MEDIUM,
                "Entropy-based detection",
            )

        is_hex = _RE_HEX.match(value) is not None

        if (
            length >= 24
            and _RE_LONG_ALPHANUMERIC.match(value)
            and not _RE_WHITESPACE.search(value)
        ):
            if entropy < 2.5:
                return _not_secret("Long alphanumeric string with low entropy", Confidence.MEDIUM)
            if is_hex and length == 32 and not keyword:
                return _not_secret("Likely MD5 hash without secret context", Confidence.MEDIUM)
            return _secret(
                f"Long ({length} chars) alphanumeric string",
                Confidence.LOW,
                "Pattern-based detection",
            )

        if length >= 32 and is_hex:
            if entropy < 2.0:
                return _not_secret("Hexadecimal string with low entropy", Confidence.MEDIUM)
            if length in COMMON_HASH_LENGTHS:
                return _secret(
                    f"{length}-character hexadecimal string (likely hash or key)",
                    Confidence.MEDIUM,
                    "Hash detection",
                )

        if length >= 20 and length % 4 == 0 and is_base64_round_trip(value):
            if entropy >= 3.5:
                return _secret(
                    f"{length}-character base64 string with high entropy",
                    Confidence.MEDIUM,
                    "Base64 detection",
                )
            return _not_secret("Base64 string with low entropy", Confidence.MEDIUM)

        # Every value this matches is also a long alphanumeric string, so the
        # rule above classifies it first; kept for the documented rule order.
        if _RE_EXTENDED_UUID.match(value):
            return _secret(
                "UUID-like format with extra characters (custom token)",
                Confidence.MEDIUM,
                "Token detection",
            )

        if length >= 20 and keyword and entropy >= 3.0 and complexity >= 3:
            return _secret(
                f"Secret keyword with mixed complexity ({entropy:.2f} entropy)",
                Confidence.MEDIUM,
                "Complex pattern detection",
            )

        for prefix, min_length, confidence in SECRET_PREFIXES:
            if value.startswith(prefix) and length >= min_length:
                return _secret(
                    f"Starts with known secret prefix '{prefix}'",
                    confidence,
                    "Prefix detection",
                )

        return _not_secret("No secret patterns detected")


_default_detector: Optional[SecretDetector] = None


def get_default_detector() -> SecretDetector:
    """Shared detector built from the packaged catalog."""
    global _default_detector
    if _default_detector is None:
        _default_detector = SecretDetector()
    return _default_detector


def is_potentially_a_secret(key: Any, value: Any) -> DetectionVerdict:
    """Classify ``value`` found under ``key`` with the shared detector."""
    return get_default_detector().is_potentially_a_secret(key, value)


def clear_entropy_cache() -> None:
    """Drop every memoized entropy score held by the shared detector."""
    get_default_detector().clear_cache()
