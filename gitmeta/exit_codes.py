"""
Standard exit codes and error types for gitmeta.

Following Unix/POSIX conventions for command-line tools. Git detection
failures are exceptions carrying their own exit code so the CLI layer can
report them uniformly.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
NOT_A_REPO = 64          # Directory is not inside a git repository
GIT_NOT_FOUND = 65       # No git binary on PATH
PERMISSION_ERROR = 67    # Insufficient permissions
GIT_TIMEOUT = 68         # A git query exceeded its deadline
PATH_ERROR = 69          # Directory could not be placed inside the repository
DATA_ERROR = 70          # Data format or validation error
PARTIAL_SUCCESS = 71     # Metadata assembled with missing fields
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': PATH_ERROR,
    'NotADirectoryError': PATH_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'TimeoutError': GIT_TIMEOUT,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'JSONDecodeError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class PartialSuccessError(CommandError):
    """Raised when metadata was assembled but some fields are missing."""
    def __init__(self, message: str, missing: Optional[list] = None):
        super().__init__(message, PARTIAL_SUCCESS)
        self.missing = missing or []


class GitMetaError(CommandError):
    """Base class for all git metadata failures."""
    default_message = "git metadata error"
    default_exit_code = GENERAL_ERROR

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        message = message or self.default_message
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, self.default_exit_code)
        self.detail = detail


class NoGitBinaryError(GitMetaError):
    """No git binary found."""
    default_message = "No git binary found"
    default_exit_code = GIT_NOT_FOUND


class NotAGitDirError(GitMetaError):
    """The given directory is not inside a git repository."""
    default_message = "Not a git directory"
    default_exit_code = NOT_A_REPO


class GitBaseDirError(GitMetaError):
    """The repository root could not be determined."""
    default_message = "Could not detect git base dir"
    default_exit_code = NOT_A_REPO


class GitTimeoutError(GitMetaError):
    """A git query was cancelled because it exceeded its deadline."""
    default_message = "Git command timed out"
    default_exit_code = GIT_TIMEOUT


class RelativePathError(GitMetaError):
    """The queried directory could not be resolved against the repository root."""
    default_message = "Could not compute path relative to git base dir"
    default_exit_code = PATH_ERROR


class NonRelativePathError(RelativePathError):
    """The queried directory lies outside the repository root."""
    default_message = "unexpected non-relative path within git dir"


class DetectionError(GitMetaError):
    """
    A single metadata field could not be detected.

    Detection errors are non-fatal: assembly continues with an empty value
    for the field named by ``field``.
    """
    field = ""
    default_exit_code = PARTIAL_SUCCESS


class CouldNotDetectRemoteError(DetectionError):
    default_message = "Could not auto-detect or parse Git remote URL"
    field = "remote_url"


class CouldNotDetectHashError(DetectionError):
    default_message = "Could not auto-detect or parse Git hash"
    field = "hash"


class CouldNotDetectShortHashError(DetectionError):
    default_message = "Could not auto-detect or parse Git short hash"
    field = "short_hash"


class CouldNotDetectBranchError(DetectionError):
    default_message = "Could not auto-detect or parse Git branch"
    field = "branch"


class RemoteURLParseError(GitMetaError):
    """The remote URL was detected but has no canonical form."""
    default_message = "Could not parse Git remote URL"
    default_exit_code = DATA_ERROR
