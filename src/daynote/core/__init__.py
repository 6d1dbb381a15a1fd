"""Core shared infrastructure for daynote.

This package contains the dated-note logic and its foundations:
    - args: argument parsing for the today command
    - dates: date(1) dialect strategies
    - paths: note path derivation
    - notebook: notebook and editor adapters
    - today_impl: create-or-open orchestration
    - config: Application configuration management
    - console: Rich console output and logging
    - result: Error handling patterns
"""

from __future__ import annotations

from . import config, console

__all__ = ["config", "console"]
