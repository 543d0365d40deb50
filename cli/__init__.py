"""CLI package for Codex Account Switcher

This package provides the command-line interface for storing Codex
accounts, switching the active login and checking usage.
"""

from cli.cli_app import CodexSwitcherCLI
from cli.main import main

__all__ = [
    "CodexSwitcherCLI",
    "main",
]
