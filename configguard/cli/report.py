"""
ConfigGuard CLI - Report formatting

Renders classifier verdicts and aggregate security results for the terminal.
"""
import json
from typing import Any, Dict, Optional

import click

from configguard.core.models import Confidence, DetectionVerdict, SecurityResult

TIER_STYLES = {
    Confidence.HIGH: ("🔴", "High", "red"),
    Confidence.MEDIUM: ("🟡", "Medium", "yellow"),
    Confidence.LOW: ("🟢", "Low", "bright_black"),
}


def _style(text: str, color: bool, **styles: Any) -> str:
    return click.style(text, **styles) if color else text


def summary_line(result: SecurityResult) -> str:
    """One-line summary such as 'Found: 3 potential secrets • 1 high risk'."""
    parts = [
        f"Found: {result.total_count} potential secret"
        f"{'' if result.total_count == 1 else 's'}"
    ]
    for count, label in (
        (result.high_confidence_count, "high"),
        (result.medium_confidence_count, "medium"),
        (result.low_confidence_count, "low"),
    ):
        if count > 0:
            parts.append(f"{count} {label} risk")
    return " • ".join(parts)


def format_security_report(title: str, result: SecurityResult, color: bool = True,
                           blocked: Optional[bool] = None) -> str:
    """
    Render a security result grouped by confidence tier.

    Args:
        title: Heading, usually naming the scanned file or target
        result: Aggregate result from the tree walker
        color: Apply terminal colours
        blocked: Whether the findings stop generation (defaults to "any found")

    Returns:
        Multi-line report text
    """
    lines = [
        _style(f"⚠ {title}" if result.total_count else title, color, bold=True),
        _style(summary_line(result), color, dim=True),
        "=" * 60,
    ]

    for confidence, findings in result.findings_by_confidence().items():
        if not findings:
            continue
        icon, label, fg = TIER_STYLES[confidence]
        lines.append("")
        lines.append(_style(f"{icon} {label} ({len(findings)})", color, fg=fg, bold=True))
        for finding in findings:
            location = finding.path or finding.key or "unknown"
            extra = f" [{finding.category}]" if finding.category else ""
            lines.append(
                f"   • {_style(location, color, fg='cyan')}: {finding.reason}"
                f"{_style(extra, color, dim=True)}"
            )

    if result.allowed:
        lines.append("")
        lines.append(
            _style(f"ℹ️  {len(result.allowed)} flagged value(s) allowed by unsafe():", color, fg="blue")
        )
        for finding in result.allowed:
            lines.append(f"   • {finding.path or finding.key}")

    if blocked is None:
        blocked = result.total_count > 0

    lines.append("")
    if blocked:
        lines.append(_style("✗ Generation blocked for security", color, fg="red", bold=True))
    elif result.total_count:
        lines.append(_style("⚠ Written anyway: target is git-ignored", color, fg="yellow", bold=True))
    else:
        lines.append(_style("✅ No potential secrets found", color, fg="green"))
    return "\n".join(lines)


def format_verdict(key: str, verdict: DetectionVerdict, color: bool = True) -> str:
    """Render a single classifier verdict."""
    if verdict.is_secret:
        icon, label, fg = TIER_STYLES[verdict.confidence]
        headline = _style(f"{icon} '{key}' is potentially a secret", color, fg=fg, bold=True)
    else:
        headline = _style(f"✅ '{key}' does not look like a secret", color, fg="green")

    lines = [
        headline,
        f"   Reason:     {verdict.reason}",
        f"   Confidence: {verdict.confidence.value}",
    ]
    if verdict.category:
        lines.append(f"   Category:   {verdict.category}")
    return "\n".join(lines)


def to_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, indent=2)
