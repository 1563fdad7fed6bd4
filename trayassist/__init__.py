"""Tool registry, structured logging, error reporting and version checks for a desktop assistant."""

__version__ = "0.1.0"