"""Core package for ConfigGuard."""

from configguard.core.detector import SecretDetector, is_potentially_a_secret
from configguard.core.entropy import EntropyAnalyzer
from configguard.core.exceptions import (
    CircularReferenceError,
    ConfigGuardError,
    SecretsDetectedError,
)
from configguard.core.gate import SecurityGate
from configguard.core.models import Confidence, DetectionVerdict, SecurityResult
from configguard.core.walker import has_secrets, unwrap_unsafe

__all__ = [
    "SecretDetector",
    "is_potentially_a_secret",
    "EntropyAnalyzer",
    "CircularReferenceError",
    "ConfigGuardError",
    "SecretsDetectedError",
    "SecurityGate",
    "Confidence",
    "DetectionVerdict",
    "SecurityResult",
    "has_secrets",
    "unwrap_unsafe",
]
