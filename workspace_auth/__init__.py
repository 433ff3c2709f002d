"""Workspace reservation authentication service."""

__version__ = "1.0.0"
