"""Comparison badge: percent change of a new value against a reference ledger."""

from __future__ import annotations

from xml.sax.saxutils import escape

from valuetrack.errors import ZeroReferenceError
from valuetrack.models.ledger import ValueEntry, sort_by_date

WIDTH = 200
HEIGHT = 50

COLOR_UP = "#2e7d32"
COLOR_DOWN = "#b71c1c"


def latest_entry(entries: list[ValueEntry]) -> ValueEntry | None:
    """Return the entry with the greatest date; ties go to the one appended last."""
    if not entries:
        return None
    return sort_by_date(entries)[-1]


def percent_change(entry: ValueEntry, reference: ValueEntry) -> float:
    """Return ``(entry - reference) / reference * 100``.

    Raises:
        ZeroReferenceError: the reference value is zero.
    """
    if reference.value == 0:
        raise ZeroReferenceError(f"reference value at {reference.sha} is zero; percent change is undefined")
    return (entry.value - reference.value) / reference.value * 100


def render_comparison(key: str, entry: ValueEntry, reference_entries: list[ValueEntry]) -> str | None:
    """Render a 200x50 badge comparing *entry* to the newest reference entry.

    Returns None when there is nothing to compare against.
    """
    reference = latest_entry(reference_entries)
    if reference is None:
        return None

    change = percent_change(entry, reference) + 0.0  # folds -0.0 into 0.0
    color = COLOR_UP if change >= 0 else COLOR_DOWN
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{WIDTH}" height="{HEIGHT}">\n'
        f'  <rect x="0" y="0" rx="25" ry="25" width="{WIDTH}" height="{HEIGHT}" style="fill:{color};" />\n'
        f'  <text x="20" y="30" font-family="Verdana" font-size="20" fill="white">{escape(key)}</text>\n'
        f'  <text x="120" y="30" font-family="Verdana" font-size="20" fill="white">{change:+.2f}%</text>\n'
        f"</svg>\n"
    )
