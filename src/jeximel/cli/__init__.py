"""Command-line interface module for jeximel.

This module provides the ``jeximel`` console script for re-formatting XML
files and inspecting their element trees.
"""

from .main import main

__all__ = ["main"]
