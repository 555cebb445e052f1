"""Core components of the project document service."""
