"""Working demonstrations of classic object design idioms."""

__version__ = "0.1.0"

__all__ = [
    "expressions",
    "widget",
    "memory",
    "logger",
    "files",
    "resources",
    "traits",
    "singletons",
]