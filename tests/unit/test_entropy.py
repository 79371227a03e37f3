"""Unit tests for entropy analysis."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from configguard.core.entropy import (
    EntropyAnalyzer,
    character_complexity,
    shannon_entropy,
    strip_noise,
)
from tests.conftest import RANDOM16, RANDOM32


@pytest.mark.unit
class TestShannonEntropy:
    """Test raw entropy calculation."""

    def test_empty_string(self):
        assert shannon_entropy("") == 0.0

    def test_single_symbol(self):
        assert shannon_entropy("aaaa") == 0.0

    def test_two_symbols(self):
        assert shannon_entropy("aabb") == pytest.approx(1.0)

    def test_distinct_symbols(self):
        assert shannon_entropy("abcd") == pytest.approx(2.0)
        assert shannon_entropy(RANDOM16) == pytest.approx(4.0)


@pytest.mark.unit
class TestStripNoise:
    """Test removal of low-information content."""

    def test_collapses_long_runs(self):
        assert strip_noise("zzzzzzz") == "zzz"
        assert strip_noise("xaaaay") == "xaaaay"

    def test_removes_sequences(self):
        assert strip_noise("xx12345678yy") == "xxyy"
        assert strip_noise("ABCDEFGHz") == "z"
        assert strip_noise("QwErTy!") == "!"

    def test_leaves_random_values_alone(self):
        assert strip_noise(RANDOM32) == RANDOM32


@pytest.mark.unit
class TestEntropyAnalyzer:
    """Test EntropyAnalyzer."""

    def test_entropy_of_short_inputs(self, analyzer):
        assert analyzer.entropy("") == 0.0
        assert analyzer.entropy("a") == 0.0
        assert analyzer.entropy("ab") == pytest.approx(1.0)

    def test_noise_is_stripped_before_scoring(self, analyzer):
        assert analyzer.entropy("qwerty") == 0.0
        assert analyzer.entropy("aaaaaaaaaa") == 0.0

    def test_results_are_cached(self, analyzer):
        first = analyzer.entropy(RANDOM32)

        assert analyzer.cache_size == 1
        assert analyzer.entropy(RANDOM32) == first
        assert analyzer.cache_size == 1

    def test_cache_is_cleared_when_full(self):
        analyzer = EntropyAnalyzer(max_cache_size=3)
        for value in ("one", "two", "three"):
            analyzer.entropy(value)
        assert analyzer.cache_size == 3

        analyzer.entropy("four")

        assert analyzer.cache_size == 1

    def test_clear_cache(self, analyzer):
        analyzer.entropy(RANDOM16)
        analyzer.clear_cache()

        assert analyzer.cache_size == 0

    def test_invalid_cache_size(self):
        with pytest.raises(ValueError):
            EntropyAnalyzer(max_cache_size=0)

    def test_has_very_low_entropy(self, analyzer):
        assert analyzer.has_very_low_entropy("ababababababab")
        assert analyzer.has_very_low_entropy("abab")
        assert analyzer.has_very_low_entropy("a" * 40)
        assert not analyzer.has_very_low_entropy(RANDOM16)

    def test_concurrent_use(self):
        analyzer = EntropyAnalyzer(max_cache_size=10)
        values = [f"{RANDOM16}{i}" for i in range(200)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(analyzer.entropy, values))

        assert results == [shannon_entropy(v) for v in values]
        assert analyzer.cache_size <= 10


@pytest.mark.unit
class TestCharacterComplexity:
    """Test character class counting."""

    def test_single_class(self):
        assert character_complexity("abc") == 1
        assert character_complexity("123") == 1

    def test_mixed_classes(self):
        assert character_complexity("aB3") == 3
        assert character_complexity("aB3!") == 4

    def test_non_ascii_counts_as_other(self):
        assert character_complexity("é") == 1
        assert character_complexity("aé") == 2
