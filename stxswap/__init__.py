"""
Core package for the Stacks server-side swap tool.

Settings and logging are imported lazily by the modules that need them so that
the translation layer stays importable without any environment configured.
"""

__all__ = [
    "settings",
    "log",
]


def __getattr__(name):
    if name == "settings":
        from stxswap.settings.config import settings
        return settings
    if name == "log":
        from stxswap.logging import log
        return log
    raise AttributeError(f"module 'stxswap' has no attribute {name!r}")
