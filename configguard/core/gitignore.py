"""Version-control ignore checks backed by GitPython."""

from pathlib import Path
from typing import Union

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from configguard.core.exceptions import NotInGitRepositoryError
from configguard.utils.logger import get_logger

logger = get_logger(__name__)


class GitIgnoreChecker:
    """Answers whether a path is ignored by the enclosing git repository."""

    def __init__(self, base_dir: Union[str, Path] = ".", search_parent_directories: bool = True):
        """
        Locate the repository containing ``base_dir``.

        Raises:
            NotInGitRepositoryError: if ``base_dir`` is not inside a repository
        """
        try:
            self.repo = Repo(str(base_dir), search_parent_directories=search_parent_directories)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotInGitRepositoryError(
                "Not in a git repository. Run this command from within a git repository.",
                details={"base_dir": str(base_dir), "error": str(e)},
            )
        self.working_dir = Path(self.repo.working_tree_dir or base_dir).absolute()

    def is_ignored(self, path: Union[str, Path]) -> bool:
        """
        Check whether ``path`` is ignored by git.

        Relative paths are resolved against the repository root. Failing git
        commands are logged and reported as "not ignored".
        """
        target = Path(path)
        if not target.is_absolute():
            target = self.working_dir / target
        try:
            return bool(self.repo.ignored(str(target)))
        except GitCommandError as e:
            logger.warning(f"git check-ignore failed for {target}: {e}")
            return False
