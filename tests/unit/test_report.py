"""Unit tests for report formatting."""

import json

import pytest

from configguard.cli.report import format_security_report, format_verdict, summary_line, to_json
from configguard.core.models import Confidence, DetectionVerdict, SecretFinding, SecurityResult


@pytest.mark.unit
class TestSecurityReport:
    """Test rendering of aggregate results."""

    def test_summary_line(self, sample_result):
        assert summary_line(sample_result) == (
            "Found: 2 potential secrets • 1 high risk • 1 medium risk"
        )

    def test_summary_line_singular(self):
        result = SecurityResult()
        result.add(SecretFinding("a", "a", "reason", Confidence.LOW))

        assert summary_line(result) == "Found: 1 potential secret • 1 low risk"

    def test_grouped_by_tier(self, sample_result):
        report = format_security_report("Security check: app", sample_result, color=False)

        assert "⚠ Security check: app" in report
        assert "🔴 High (1)" in report
        assert "🟡 Medium (1)" in report
        assert "Low (" not in report
        assert "database.password" in report
        assert "[Entropy-based detection]" in report
        assert report.index("🔴 High") < report.index("🟡 Medium")
        assert report.endswith("✗ Generation blocked for security")

    def test_ignored_target_footer(self, sample_result):
        report = format_security_report("Security check: app", sample_result, color=False,
                                        blocked=False)

        assert "database.password" in report
        assert "blocked" not in report
        assert report.endswith("⚠ Written anyway: target is git-ignored")

    def test_clean_result(self):
        report = format_security_report("Secret scan", SecurityResult(), color=False)

        assert "Found: 0 potential secrets" in report
        assert report.endswith("✅ No potential secrets found")

    def test_allowed_values_listed(self):
        result = SecurityResult()
        result.allowed.append(SecretFinding("legacy.token", "token", "reason", Confidence.HIGH))

        report = format_security_report("Secret scan", result, color=False)

        assert "1 flagged value(s) allowed by unsafe()" in report
        assert "legacy.token" in report

    def test_color(self, sample_result):
        report = format_security_report("Secret scan", sample_result, color=True)

        assert "\x1b[" in report


@pytest.mark.unit
class TestVerdictFormatting:
    """Test rendering of single verdicts."""

    def test_secret(self):
        verdict = DetectionVerdict(True, "Matches JWT Token pattern", Confidence.MEDIUM, "JWT Token")

        text = format_verdict("auth", verdict, color=False)

        assert "'auth' is potentially a secret" in text
        assert "Confidence: medium" in text
        assert "Category:   JWT Token" in text

    def test_not_secret(self):
        verdict = DetectionVerdict(False, "Value too short", Confidence.HIGH)

        text = format_verdict("port", verdict, color=False)

        assert "does not look like a secret" in text
        assert "Category" not in text

    def test_to_json(self):
        assert json.loads(to_json({"a": 1})) == {"a": 1}
