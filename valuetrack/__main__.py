"""Entry point for `python -m valuetrack`.

Usage:
    python -m valuetrack 42.5 --branch metrics
    uv run python -m valuetrack 42.5 --branch metrics --key bench-a
"""

from __future__ import annotations

from valuetrack.cli import cli

cli()
