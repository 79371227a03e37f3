"""Unit tests for core models."""

import pytest

from configguard.core.models import (
    Confidence,
    DetectionVerdict,
    SecretFinding,
    SecurityResult,
    UnsafeValue,
    unsafe,
)


def _finding(path, confidence):
    return SecretFinding(path=path, key=path.split(".")[-1], reason="test",
                         confidence=confidence)


@pytest.mark.unit
class TestConfidence:
    """Test Confidence enum."""

    def test_values(self):
        assert Confidence.LOW.value == "low"
        assert Confidence.MEDIUM.value == "medium"
        assert Confidence.HIGH.value == "high"

    def test_rank_ordering(self):
        assert Confidence.LOW.rank < Confidence.MEDIUM.rank < Confidence.HIGH.rank

    def test_from_string(self):
        assert Confidence("medium") is Confidence.MEDIUM


@pytest.mark.unit
class TestDetectionVerdict:
    """Test DetectionVerdict model."""

    def test_to_dict(self):
        verdict = DetectionVerdict(
            is_secret=True,
            reason="Matches JWT Token pattern",
            confidence=Confidence.MEDIUM,
            category="JWT Token",
        )

        data = verdict.to_dict()

        assert data == {
            "is_secret": True,
            "reason": "Matches JWT Token pattern",
            "confidence": "medium",
            "category": "JWT Token",
        }

    def test_to_dict_without_category(self):
        verdict = DetectionVerdict(is_secret=False, reason="Value too short",
                                   confidence=Confidence.HIGH)

        assert "category" not in verdict.to_dict()

    def test_verdicts_compare_by_value(self):
        first = DetectionVerdict(False, "Value too short", Confidence.HIGH)
        second = DetectionVerdict(False, "Value too short", Confidence.HIGH)

        assert first == second

    def test_verdict_is_immutable(self):
        verdict = DetectionVerdict(False, "Value too short", Confidence.HIGH)

        with pytest.raises(AttributeError):
            verdict.is_secret = True


@pytest.mark.unit
class TestSecurityResult:
    """Test SecurityResult model."""

    def test_empty_result(self):
        result = SecurityResult()

        assert result.total_count == 0
        assert not result.has_secrets
        assert result.secrets_found == []
        assert result.allowed == []

    def test_add_updates_counters(self):
        result = SecurityResult()
        result.add(_finding("a", Confidence.HIGH))
        result.add(_finding("b", Confidence.MEDIUM))
        result.add(_finding("c", Confidence.MEDIUM))
        result.add(_finding("d", Confidence.LOW))

        assert result.total_count == 4
        assert result.high_confidence_count == 1
        assert result.medium_confidence_count == 2
        assert result.low_confidence_count == 1
        assert result.has_secrets
        assert [f.path for f in result.secrets_found] == ["a", "b", "c", "d"]

    def test_findings_by_confidence(self):
        result = SecurityResult()
        result.add(_finding("low", Confidence.LOW))
        result.add(_finding("high", Confidence.HIGH))

        groups = result.findings_by_confidence()

        assert list(groups) == [Confidence.HIGH, Confidence.MEDIUM, Confidence.LOW]
        assert [f.path for f in groups[Confidence.HIGH]] == ["high"]
        assert groups[Confidence.MEDIUM] == []

    def test_to_dict(self):
        result = SecurityResult()
        result.add(_finding("database.password", Confidence.HIGH))
        result.allowed.append(_finding("legacy.token", Confidence.MEDIUM))

        data = result.to_dict()

        assert data["total_count"] == 1
        assert data["high_confidence_count"] == 1
        assert data["secrets_found"][0]["path"] == "database.password"
        assert data["secrets_found"][0]["confidence"] == "high"
        assert data["allowed"][0]["path"] == "legacy.token"


@pytest.mark.unit
class TestUnsafeValue:
    """Test the unsafe() marker."""

    def test_wraps_value(self):
        marked = unsafe("s3cr3t")

        assert isinstance(marked, UnsafeValue)
        assert marked.value == "s3cr3t"

    def test_repr_hides_value(self):
        assert "s3cr3t" not in repr(unsafe("s3cr3t"))

    def test_wrapping_twice_is_a_no_op(self):
        marked = unsafe("s3cr3t")

        assert unsafe(marked) is marked

    def test_equality(self):
        assert unsafe("a") == unsafe("a")
        assert unsafe("a") != unsafe("b")
        assert unsafe("a") != "a"
        assert hash(unsafe("a")) == hash(unsafe("a"))
