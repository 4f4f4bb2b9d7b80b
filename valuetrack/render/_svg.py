"""Helpers shared by the SVG renderers."""

from __future__ import annotations


def fmt(number: float) -> str:
    """Format a coordinate with at most two decimals and no trailing zeros."""
    text = f"{number:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
