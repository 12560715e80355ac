from .git_blame import GitBlame, parse_porcelain

__all__ = ["GitBlame", "parse_porcelain"]
