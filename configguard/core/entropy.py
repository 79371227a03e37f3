"""Shannon-entropy analysis with a bounded memoization cache."""

import math
import re
import threading
from collections import Counter
from typing import Dict

# Runs of 5+ identical characters are collapsed to 3
_RE_REPEATED_RUN = re.compile(r"(.)\1{4,}", re.DOTALL)
# Low-information sequences removed before counting
_RE_NOISE = re.compile(r"12345678|abcdefgh|qwerty", re.IGNORECASE)

DEFAULT_CACHE_SIZE = 1000


def strip_noise(data: str) -> str:
    """Remove low-information runs and sequences from ``data``."""
    collapsed = _RE_REPEATED_RUN.sub(r"\1\1\1", data)
    return _RE_NOISE.sub("", collapsed)


def shannon_entropy(data: str) -> float:
    """
    Calculate order-0 Shannon entropy of a string in bits per character.

    Args:
        data: String to analyze

    Returns:
        Entropy value (higher = more random)
    """
    if not data:
        return 0.0

    entropy = 0.0
    length = len(data)
    for count in Counter(data).values():
        probability = count / length
        entropy -= probability * math.log2(probability)

    return entropy


class EntropyAnalyzer:
    """
    Computes noise-stripped entropy scores and memoizes them.

    The cache is keyed by the exact input string and is cleared wholesale once
    it is full. Callers must not assume a given entry survives.
    """

    def __init__(self, max_cache_size: int = DEFAULT_CACHE_SIZE):
        """
        Initialize the analyzer.

        Args:
            max_cache_size: Number of entries kept before the cache is reset
        """
        if max_cache_size < 1:
            raise ValueError("max_cache_size must be at least 1")
        self.max_cache_size = max_cache_size
        self._cache: Dict[str, float] = {}
        self._lock = threading.Lock()

    @property
    def cache_size(self) -> int:
        """Number of memoized entries."""
        with self._lock:
            return len(self._cache)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def entropy(self, data: str) -> float:
        """
        Entropy of ``data`` after noise stripping.

        Returns 0.0 when fewer than two characters survive stripping.
        """
        with self._lock:
            cached = self._cache.get(data)
        if cached is not None:
            return cached

        cleaned = strip_noise(data)
        result = 0.0 if len(cleaned) < 2 else shannon_entropy(cleaned)

        with self._lock:
            if len(self._cache) >= self.max_cache_size:
                self._cache.clear()
            self._cache[data] = result
        return result

    def has_very_low_entropy(self, data: str) -> bool:
        """True for repetitive content (few distinct chars or entropy < 1.5)."""
        if len(set(data)) <= 2 and len(data) > 10:
            return True
        return self.entropy(data) < 1.5


def character_complexity(value: str) -> int:
    """Count character classes present: digits, lower, upper, other."""
    has_digit = has_lower = has_upper = has_other = False
    for char in value:
        if "0" <= char <= "9":
            has_digit = True
        elif "a" <= char <= "z":
            has_lower = True
        elif "A" <= char <= "Z":
            has_upper = True
        else:
            has_other = True
    return sum((has_digit, has_lower, has_upper, has_other))
