class LockblameError(Exception):
    """Base exception for domain-specific errors."""


class LockfileError(LockblameError):
    """Missing or unreadable lock file."""


class RepositoryError(LockblameError):
    """Not a repository, or blame is unavailable for the requested path."""


class BlameError(LockblameError):
    """The blame tool could not be run or produced output we cannot parse."""
