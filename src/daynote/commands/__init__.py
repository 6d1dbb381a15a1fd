"""CLI command modules for daynote.

    - today: create or open a dated note (aliases: day, td)
"""

from __future__ import annotations

from . import today

__all__ = ["today"]
