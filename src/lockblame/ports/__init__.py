from .blame import BlamePort
from .lockfile import LockfilePort

__all__ = ["BlamePort", "LockfilePort"]
