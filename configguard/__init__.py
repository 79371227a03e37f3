"""ConfigGuard - secret detection gate for generated configuration files."""

__version__ = "0.1.0"
__author__ = "ConfigGuard Team"
__email__ = "team@configguard.dev"

from configguard.core.detector import is_potentially_a_secret
from configguard.core.models import (
    Confidence,
    DetectionVerdict,
    SecretFinding,
    SecurityResult,
    unsafe,
)
from configguard.core.walker import has_secrets

__all__ = [
    "Confidence",
    "DetectionVerdict",
    "SecretFinding",
    "SecurityResult",
    "has_secrets",
    "is_potentially_a_secret",
    "unsafe",
    "__version__",
]
