from .local_lockfile import LocalLockfile

__all__ = ["LocalLockfile"]
