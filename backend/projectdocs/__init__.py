"""Project document manager service."""

__version__ = "0.1.0"
