"""Punto de entrada ``python -m tally_tool``."""

from __future__ import annotations

from tally_tool.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
