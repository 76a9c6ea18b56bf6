"""
Metadata service for gitmeta.

Assembles a GitMetadata record for a directory from the individual facts the
git client reports. Missing remote, hash, short hash or branch information is
tolerated: the record is still returned together with the last detection
error so the caller can decide whether the gap matters.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..domain import GitMetadata, normalize_remote_url
from ..exit_codes import (
    DetectionError,
    GitTimeoutError,
    NoGitBinaryError,
    NonRelativePathError,
    NotAGitDirError,
    RelativePathError,
    RemoteURLParseError,
)
from ..infra import GitClient

logger = logging.getLogger(__name__)


def to_slash(path: str) -> str:
    """Convert platform separators to forward slashes."""
    if os.sep != '/':
        path = path.replace(os.sep, '/')
    return path


def relative_dir(base_dir: str, directory: str) -> str:
    """
    Compute the path of directory relative to base_dir.

    The directory is made absolute and symlink-resolved, then compared with
    base_dir segment by segment.

    Returns:
        Slash-separated relative path, "." when directory is base_dir

    Raises:
        RelativePathError: If the directory cannot be resolved or base_dir is not absolute
        NonRelativePathError: If the directory is not base_dir or one of its descendants
    """
    try:
        resolved = Path(directory).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise RelativePathError(detail=f"eval symlinks for {directory}: {e}") from e

    if not os.path.isabs(base_dir):
        raise RelativePathError(detail=f"git base path {base_dir} is not absolute")

    base_parts = to_slash(base_dir).rstrip('/').split('/')
    path_parts = to_slash(str(resolved)).split('/')
    if len(path_parts) < len(base_parts) or path_parts[:len(base_parts)] != base_parts:
        raise NonRelativePathError(
            detail=f"{directory} is not within git base path {base_dir}"
        )

    rel = '/'.join(path_parts[len(base_parts):])
    return rel or '.'


class MetadataService:
    """
    Service for assembling git metadata about directories.

    Example:
        service = MetadataService()
        meta, err = service.assemble("src/app")
        if err:
            print(f"warning: {err}")
        print(meta.git_url, meta.rel_dir)
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize MetadataService.

        Args:
            git_client: Git client instance (creates one from config if None)
            config: Configuration dict (uses defaults if None)
        """
        self.config = config or {}
        git_config = self.config.get('git', {})
        self.git = git_client or GitClient(
            timeout=git_config.get('timeout_seconds', 30),
            binary=git_config.get('binary', 'git'),
            short_hash_length=git_config.get('short_hash_length', 8),
        )
        self.remote = git_config.get('remote', 'origin')
        self.parallel = max(1, int(git_config.get('parallel_queries', 1)))
        # 0 means no overall limit, only the per-command timeout
        self.deadline_seconds = git_config.get('deadline_seconds', 0) or None
        self.last_errors: List[DetectionError] = []

    def assemble(
        self,
        directory: str,
        timeout: Optional[float] = None
    ) -> Tuple[GitMetadata, Optional[DetectionError]]:
        """
        Detect git metadata for a directory.

        Args:
            directory: Directory inside a git working tree
            timeout: Overall time limit in seconds for all git queries
                (default: git.deadline_seconds from config, if set)

        Returns:
            Tuple of (metadata, error). error is the last non-fatal detection
            failure, or None if every field was detected. All of them are
            kept in ``last_errors``.

        Raises:
            NoGitBinaryError: If git is not installed
            NotAGitDirError: If directory is not inside a repository
            GitBaseDirError: If the repository root cannot be determined
            RemoteURLParseError: If the remote URL has no canonical form
            RelativePathError: If directory cannot be placed inside the root
            GitTimeoutError: If a git query or the whole assembly runs out of time
        """
        directory = str(directory)
        if timeout is None:
            timeout = self.deadline_seconds
        deadline = time.monotonic() + timeout if timeout else None

        if not self.git.has_git_binary():
            raise NoGitBinaryError()
        if not self.git.is_git_repo(directory, **_bounded(deadline)):
            raise NotAGitDirError(detail=directory)

        base_dir = self.git.repository_root(directory, **_bounded(deadline))
        facts, errors = self._collect(directory, deadline)

        remote_url = facts['remote_url']
        git_url = ""
        if remote_url:
            git_url = normalize_remote_url(remote_url)
            if not git_url:
                raise RemoteURLParseError(detail=f"cannot parse remote url {remote_url!r}")

        rel_dir = relative_dir(base_dir, directory)

        metadata = GitMetadata(
            base_dir=to_slash(base_dir),
            rel_dir=rel_dir,
            remote_url=remote_url,
            git_url=git_url,
            hash=facts['hash'],
            short_hash=facts['short_hash'],
            branch=tuple(facts['branch']),
            tags=tuple(facts['tags']),
            timestamp=facts['timestamp'],
        )

        self.last_errors = errors
        for error in errors:
            logger.warning(f"{directory}: {error}")

        return metadata, (errors[-1] if errors else None)

    def _queries(
        self,
        directory: str,
        deadline: Optional[float]
    ) -> List[Tuple[str, Callable[[], Any], Any]]:
        """Field name, query and fallback value for every optional fact."""
        git = self.git
        return [
            ('remote_url', lambda: git.remote_url(directory, self.remote, **_bounded(deadline)), ""),
            ('hash', lambda: git.commit_hash(directory, **_bounded(deadline)), ""),
            ('short_hash', lambda: git.short_commit_hash(directory, **_bounded(deadline)), ""),
            ('branch', lambda: git.current_branches(directory, **_bounded(deadline)), []),
            ('tags', lambda: git.tags_at_head(directory, **_bounded(deadline)), []),
            ('timestamp', lambda: git.commit_timestamp(directory, **_bounded(deadline)), "0"),
        ]

    def _collect(
        self,
        directory: str,
        deadline: Optional[float] = None
    ) -> Tuple[Dict[str, Any], List[DetectionError]]:
        """
        Run the optional queries, sequentially or on a thread pool.

        Results and errors are reported in query order either way. A fatal
        error in one pooled query cancels the queries that have not started
        and returns without waiting for the ones still running.
        """
        queries = self._queries(directory, deadline)

        if self.parallel > 1:
            executor = ThreadPoolExecutor(max_workers=self.parallel)
            futures = [executor.submit(_attempt, query) for _, query, _ in queries]
            try:
                wait_for = _remaining(deadline)
                for future in as_completed(futures, timeout=wait_for):
                    future.result()
            except TimeoutError as e:
                executor.shutdown(wait=False, cancel_futures=True)
                raise GitTimeoutError(detail="overall deadline exceeded") from e
            except BaseException:
                executor.shutdown(wait=False, cancel_futures=True)
                raise
            executor.shutdown()
            outcomes = [future.result() for future in futures]
        else:
            outcomes = [_attempt(query) for _, query, _ in queries]

        facts: Dict[str, Any] = {}
        errors: List[DetectionError] = []
        for (name, _, fallback), (value, error) in zip(queries, outcomes):
            if error is None:
                facts[name] = value
                continue
            facts[name] = fallback
            # Untagged commits are the common case
            if name != 'tags':
                errors.append(error)
        return facts, errors


def _remaining(deadline: Optional[float]) -> Optional[float]:
    """Seconds left until deadline, None without one."""
    if deadline is None:
        return None
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise GitTimeoutError(detail="overall deadline exceeded")
    return remaining


def _bounded(deadline: Optional[float]) -> Dict[str, float]:
    """Keyword arguments limiting one git call to what is left of deadline."""
    remaining = _remaining(deadline)
    return {} if remaining is None else {'timeout': remaining}


def _attempt(query: Callable[[], Any]) -> Tuple[Any, Optional[DetectionError]]:
    try:
        return query(), None
    except DetectionError as e:
        return None, e


def get_metadata(
    directory: str,
    config: Optional[Dict[str, Any]] = None
) -> Tuple[GitMetadata, Optional[DetectionError]]:
    """
    Detect git metadata for a directory using the loaded configuration.

    Args:
        directory: Directory inside a git working tree
        config: Configuration dict (loads from file if None)

    Returns:
        Tuple of (metadata, error), see MetadataService.assemble
    """
    if config is None:
        from ..config import load_config
        config = load_config()
    return MetadataService(config=config).assemble(directory)
