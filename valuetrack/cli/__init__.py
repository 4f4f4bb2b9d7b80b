"""valuetrack command-line interface.

Exposes:
    cli -- Click command entry point (registered as ``valuetrack`` script).
"""

from valuetrack.cli.main import cli

__all__ = ["cli"]
