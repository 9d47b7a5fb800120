"""Command line interface for adf-convert."""

from .main import app, main

__all__ = ["app", "main"]
