"""
Command-line interface components.

This package contains CLI tools and entry points for the DNS manager.
"""

from .main import main

__all__ = ["main"]
