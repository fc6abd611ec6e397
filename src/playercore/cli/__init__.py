"""Command line interface for playercore."""

from .main import cli, setup_logging

__all__ = ["cli", "setup_logging"]
