"""Evolution chart: a ledger's values over time as one open polyline."""

from __future__ import annotations

from valuetrack.models.ledger import ValueEntry, sort_by_date
from valuetrack.render._svg import fmt

WIDTH = 1000
HEIGHT = 500
MARGIN = 50


def chart_points(entries: list[ValueEntry]) -> list[tuple[float, float]]:
    """Map *entries* to canvas coordinates, oldest first.

    A single entry sits at the left margin; equal values sit on a flat line
    at mid-height.

    Raises:
        ValueError: *entries* is empty.
    """
    if not entries:
        raise ValueError("cannot chart an empty ledger")

    ordered = sort_by_date(entries)
    values = [entry.value for entry in ordered]
    low, high = min(values), max(values)

    x_step = (WIDTH - 2 * MARGIN) / (len(ordered) - 1) if len(ordered) > 1 else 0.0
    y_scale = (HEIGHT - 2 * MARGIN) / (high - low) if high != low else None

    points = []
    for i, value in enumerate(values):
        x = MARGIN + i * x_step
        y = HEIGHT / 2 if y_scale is None else HEIGHT - MARGIN - (value - low) * y_scale
        points.append((x, y))
    return points


def render_evolution(entries: list[ValueEntry]) -> str:
    """Render *entries* as a 1000x500 SVG line chart."""
    points = chart_points(entries)
    path = "M" + "L".join(f"{fmt(x)},{fmt(y)}" for x, y in points)

    marker = ""
    if len(points) == 1:
        x, y = points[0]
        marker = f'\n  <circle cx="{fmt(x)}" cy="{fmt(y)}" r="4" fill="black" />'

    return (
        f'<svg width="{WIDTH}" height="{HEIGHT}" xmlns="http://www.w3.org/2000/svg">\n'
        f'  <path d="{path}" fill="none" stroke="black" stroke-width="2" />{marker}\n'
        f"</svg>\n"
    )
