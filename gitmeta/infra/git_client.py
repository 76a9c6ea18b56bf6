"""
Git client infrastructure for gitmeta.

Provides a clean abstraction over git command execution.
Every fact gitmeta needs from git has exactly one method here, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import logging
import os
import shutil
import subprocess
from typing import List, Optional, Tuple

from ..exit_codes import (
    NoGitBinaryError,
    NotAGitDirError,
    GitBaseDirError,
    GitTimeoutError,
    CouldNotDetectRemoteError,
    CouldNotDetectHashError,
    CouldNotDetectShortHashError,
    CouldNotDetectBranchError,
)

logger = logging.getLogger(__name__)


def _first_line(output: str) -> str:
    return output.split('\n', 1)[0].strip()


def _lines(output: Optional[str]) -> List[str]:
    if not output:
        return []
    return [line.strip() for line in output.split('\n') if line.strip()]


class GitClient:
    """
    Abstraction over git commands.

    Detection methods raise the matching DetectionError subclass when git
    fails or prints nothing; callers decide whether that is fatal. A command
    that exceeds the timeout raises GitTimeoutError.

    Example:
        client = GitClient()
        if client.is_git_repo("/path/to/repo"):
            print(client.commit_hash("/path/to/repo"))
    """

    def __init__(self, timeout: float = 30, binary: str = "git", short_hash_length: int = 8):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: 30)
            binary: Git executable name or path
            short_hash_length: Length of abbreviated commit hashes
        """
        self.timeout = timeout
        self.binary = binary
        self.short_hash_length = short_hash_length

    def _run(
        self,
        args: List[str],
        cwd: str,
        timeout: Optional[float] = None
    ) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Output that is not valid UTF-8 is decoded with replacement characters.

        Args:
            args: Git arguments (e.g., ['rev-parse', 'HEAD'])
            cwd: Working directory
            timeout: Tighter limit than the client timeout, e.g. what is left
                of a caller's overall deadline

        Returns:
            Tuple of (stdout, returncode)
        """
        cmd = [self.binary] + args
        if timeout is None or timeout > self.timeout:
            timeout = self.timeout
        logger.debug(f"Running {' '.join(cmd)} in {cwd}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                errors='replace',
                timeout=timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out after {timeout:g}s: {' '.join(cmd)}")
            raise GitTimeoutError(detail=' '.join(cmd))
        except FileNotFoundError as e:
            if not os.path.isdir(cwd):
                raise NotAGitDirError(detail=f"{cwd} does not exist") from e
            raise NoGitBinaryError(detail=self.binary) from e
        except NotADirectoryError as e:
            raise NotAGitDirError(detail=f"{cwd} is not a directory") from e

        if result.returncode != 0 and result.stderr:
            logger.debug(f"{' '.join(cmd)} exited {result.returncode}: {result.stderr.strip()}")

        return result.stdout, result.returncode

    def _detail(self, args: List[str], code: int) -> str:
        return f"{self.binary} {' '.join(args)} returned exit code {code}"

    def has_git_binary(self) -> bool:
        """Check that the git executable can be found."""
        return shutil.which(self.binary) is not None

    def is_git_repo(self, path: str, timeout: Optional[float] = None) -> bool:
        """Check if path is inside a git working tree."""
        _, code = self._run(['status'], cwd=path, timeout=timeout)
        return code == 0

    def repository_root(self, path: str, timeout: Optional[float] = None) -> str:
        """
        Get the top-level directory of the repository containing path.

        Raises:
            GitBaseDirError: If git fails or prints nothing
        """
        args = ['rev-parse', '--show-toplevel']
        output, code = self._run(args, cwd=path, timeout=timeout)
        if code != 0:
            raise GitBaseDirError(detail=self._detail(args, code))
        if not output:
            raise GitBaseDirError(detail="no output returned for git base dir")
        return _first_line(output)

    def remote_url(self, path: str, remote: str = "origin", timeout: Optional[float] = None) -> str:
        """
        Get the URL of a remote.

        Raises:
            CouldNotDetectRemoteError: If the remote is not configured
        """
        args = ['config', '--get', f'remote.{remote}.url']
        output, code = self._run(args, cwd=path, timeout=timeout)
        if code != 0:
            raise CouldNotDetectRemoteError(detail=self._detail(args, code))
        if not output or not output.strip():
            raise CouldNotDetectRemoteError(detail=f"no remote {remote} url output")
        return _first_line(output)

    def commit_hash(self, path: str, timeout: Optional[float] = None) -> str:
        """Get the full hash of HEAD."""
        args = ['rev-parse', 'HEAD']
        output, code = self._run(args, cwd=path, timeout=timeout)
        if code != 0:
            raise CouldNotDetectHashError(detail=self._detail(args, code))
        if not output or not output.strip():
            raise CouldNotDetectHashError(detail="no hash output")
        return _first_line(output)

    def short_commit_hash(self, path: str, timeout: Optional[float] = None) -> str:
        """Get the abbreviated hash of HEAD."""
        args = ['rev-parse', f'--short={self.short_hash_length}', 'HEAD']
        output, code = self._run(args, cwd=path, timeout=timeout)
        if code != 0:
            raise CouldNotDetectShortHashError(detail=self._detail(args, code))
        if not output or not output.strip():
            raise CouldNotDetectShortHashError(detail="no short hash output")
        return _first_line(output)

    def current_branches(self, path: str, timeout: Optional[float] = None) -> List[str]:
        """
        Get the branch names HEAD points at.

        Returns an empty list when git prints nothing. A detached HEAD is
        reported by git as "HEAD".
        """
        args = ['rev-parse', '--abbrev-ref', 'HEAD']
        output, code = self._run(args, cwd=path, timeout=timeout)
        if code != 0:
            raise CouldNotDetectBranchError(detail=self._detail(args, code))
        return _lines(output)

    def tags_at_head(self, path: str, timeout: Optional[float] = None) -> List[str]:
        """
        Get the tags exactly matching HEAD.

        An untagged commit is the common case, so any failure yields [].
        """
        output, code = self._run(['describe', '--exact-match', '--tags'], cwd=path, timeout=timeout)
        if code != 0:
            return []
        return _lines(output)

    def commit_timestamp(self, path: str, timeout: Optional[float] = None) -> str:
        """Get the commit time of HEAD in seconds since epoch, "0" if unknown."""
        output, code = self._run(['log', '-1', '--format=%ct'], cwd=path, timeout=timeout)
        if code != 0 or not output or not output.strip():
            return "0"
        return _first_line(output)
