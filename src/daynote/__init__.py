"""daynote - create or open dated notes in a notebook from the command line.

This package provides the `daynote` command-line tool: the `today` command
(aliases `day`, `td`) resolves a date, derives the note path, creates the
note with a heading when missing, and opens it or prints its path.

Exports:
    __version__: Package version string.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
