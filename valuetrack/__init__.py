"""valuetrack: track a scalar metric per branch on a dedicated storage branch."""

__version__ = "0.3.0"
