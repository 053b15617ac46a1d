"""
Release Download Metrics Tool

Renders per-release download statistics of a GitHub repository as an HTML report.
"""

__version__ = "0.1.0"

from .cli import main

__all__ = ["main"]
