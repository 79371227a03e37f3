"""Core domain models for ConfigGuard."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Confidence(str, Enum):
    """How certain the classifier is about a verdict."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Numeric ordering (low < medium < high)."""
        return _CONFIDENCE_RANK[self]


_CONFIDENCE_RANK = {Confidence.LOW: 0, Confidence.MEDIUM: 1, Confidence.HIGH: 2}


@dataclass(frozen=True)
class DetectionVerdict:
    """Classifier output for a single key/value pair.

    ``confidence`` is always set, also for values that are not secrets, so the
    verdict explains why a value was let through.
    """

    is_secret: bool
    reason: str
    confidence: Confidence
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        data: Dict[str, Any] = {
            "is_secret": self.is_secret,
            "reason": self.reason,
            "confidence": self.confidence.value,
        }
        if self.category is not None:
            data["category"] = self.category
        return data


@dataclass(frozen=True)
class PatternEntry:
    """One row of a pattern catalog."""

    pattern: re.Pattern
    type: str
    confidence: Confidence

    def matches(self, value: str) -> bool:
        return self.pattern.search(value) is not None


@dataclass
class SecretFinding:
    """A flagged leaf found while walking a configuration tree."""

    path: str
    key: str
    reason: str
    confidence: Confidence
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "path": self.path,
            "key": self.key,
            "reason": self.reason,
            "confidence": self.confidence.value,
            "category": self.category,
        }


@dataclass
class SecurityResult:
    """Aggregate outcome of scanning one configuration tree."""

    total_count: int = 0
    high_confidence_count: int = 0
    medium_confidence_count: int = 0
    low_confidence_count: int = 0
    secrets_found: List[SecretFinding] = field(default_factory=list)
    # Flagged values the caller wrapped with ``unsafe()``; never counted.
    allowed: List[SecretFinding] = field(default_factory=list)

    @property
    def has_secrets(self) -> bool:
        """True when at least one counted secret was found."""
        return self.total_count > 0

    def add(self, finding: SecretFinding) -> None:
        """Record a finding and bump the matching confidence counter."""
        self.secrets_found.append(finding)
        self.total_count += 1
        if finding.confidence == Confidence.HIGH:
            self.high_confidence_count += 1
        elif finding.confidence == Confidence.MEDIUM:
            self.medium_confidence_count += 1
        else:
            self.low_confidence_count += 1

    def findings_by_confidence(self) -> Dict[Confidence, List[SecretFinding]]:
        """Group counted findings by confidence, highest tier first."""
        groups: Dict[Confidence, List[SecretFinding]] = {
            Confidence.HIGH: [],
            Confidence.MEDIUM: [],
            Confidence.LOW: [],
        }
        for finding in self.secrets_found:
            groups[finding.confidence].append(finding)
        return groups

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "total_count": self.total_count,
            "high_confidence_count": self.high_confidence_count,
            "medium_confidence_count": self.medium_confidence_count,
            "low_confidence_count": self.low_confidence_count,
            "secrets_found": [f.to_dict() for f in self.secrets_found],
            "allowed": [f.to_dict() for f in self.allowed],
        }


class UnsafeValue:
    """Marks a configuration value as deliberately allowed to hold a secret."""

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return "UnsafeValue(***)"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UnsafeValue) and other.value == self.value

    def __hash__(self) -> int:
        return hash(("UnsafeValue", self.value))


def unsafe(value: Any) -> UnsafeValue:
    """Wrap ``value`` so the security gate lets it through even if flagged."""
    if isinstance(value, UnsafeValue):
        return value
    return UnsafeValue(value)
