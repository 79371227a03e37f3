"""Security gate applied before a configuration target is written."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from configguard.core.detector import SecretDetector
from configguard.core.exceptions import NotInGitRepositoryError, SecretsDetectedError
from configguard.core.gitignore import GitIgnoreChecker
from configguard.core.models import SecurityResult
from configguard.core.walker import has_secrets, unwrap_unsafe
from configguard.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class GateDecision:
    """Outcome of scanning the variables for one target."""

    target: str
    path: str
    result: SecurityResult
    ignored: bool = False
    # Unwrapped variables; None while the target is blocked
    variables: Any = None

    @property
    def blocked(self) -> bool:
        """True when flagged values would reach a tracked file."""
        return self.result.total_count > 0 and not self.ignored


class SecurityGate:
    """
    Refuses to let likely secrets reach a version-controlled file.

    A target holding flagged values may only be written when its path is
    ignored by git. Values wrapped with ``unsafe()`` never block a target.
    """

    def __init__(
        self,
        detector: Optional[SecretDetector] = None,
        ignore_checker: Optional[GitIgnoreChecker] = None,
        check_gitignore: bool = True,
        base_dir: Union[str, Path] = ".",
    ):
        """
        Initialize the gate.

        Args:
            detector: Classifier used for every leaf
            ignore_checker: Git ignore collaborator (created lazily when needed)
            check_gitignore: When False, any counted secret blocks the target
            base_dir: Directory used to locate the git repository
        """
        self.detector = detector
        self.check_gitignore = check_gitignore
        self.base_dir = base_dir
        self._ignore_checker = ignore_checker

    def scan(self, variables: Any) -> SecurityResult:
        return has_secrets(variables, self.detector)

    def evaluate(self, target_name: str, target_path: Union[str, Path],
                 variables: Any) -> GateDecision:
        """
        Scan ``variables`` for a target and record whether it may be written.

        Never raises for flagged values; see :meth:`check` for the raising form.

        Args:
            target_name: Name of the target, used in logs
            target_path: File the target would be written to
            variables: Configuration-variables tree (may contain unsafe markers)

        Returns:
            GateDecision holding the scan result; ``variables`` is only
            unwrapped when the target is not blocked
        """
        result = self.scan(variables)
        ignored = result.total_count > 0 and self._is_ignored(target_path)
        decision = GateDecision(
            target=target_name,
            path=str(target_path),
            result=result,
            ignored=ignored,
        )
        if decision.blocked:
            return decision

        if ignored:
            logger.warning(
                f"Target '{target_name}' contains {result.total_count} potential "
                f"secret(s); writing anyway because {target_path} is git-ignored"
            )
        if result.allowed:
            logger.info(
                f"Target '{target_name}': {len(result.allowed)} flagged value(s) allowed by unsafe()"
            )
        decision.variables = unwrap_unsafe(variables)
        return decision

    def check(self, target_name: str, target_path: Union[str, Path], variables: Any) -> Any:
        """
        Scan ``variables`` for a target and decide whether it may be written.

        Args:
            target_name: Name of the target, used in errors and logs
            target_path: File the target would be written to
            variables: Configuration-variables tree (may contain unsafe markers)

        Returns:
            The variables with unsafe markers unwrapped

        Raises:
            SecretsDetectedError: if secrets were found and the path is not ignored
        """
        decision = self.evaluate(target_name, target_path, variables)
        if decision.blocked:
            raise SecretsDetectedError(target_name, decision.result, path=decision.path)
        return decision.variables

    def _is_ignored(self, target_path: Union[str, Path]) -> bool:
        if not self.check_gitignore:
            return False
        try:
            checker = self._get_ignore_checker()
        except NotInGitRepositoryError as e:
            logger.warning(f"{e.message} Treating {target_path} as not ignored.")
            return False
        target = Path(target_path)
        if not target.is_absolute():
            target = Path(self.base_dir).absolute() / target
        return checker.is_ignored(target)

    def _get_ignore_checker(self) -> GitIgnoreChecker:
        if self._ignore_checker is None:
            self._ignore_checker = GitIgnoreChecker(self.base_dir)
        return self._ignore_checker
