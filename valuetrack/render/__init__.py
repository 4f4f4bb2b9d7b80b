"""SVG renderers for ledgers.

Exposes:
    render_evolution  -- Line chart of a ledger's values over time.
    render_comparison -- Percent-change badge against a reference ledger.
    percent_change    -- The number shown on the comparison badge.
"""

from valuetrack.render.comparison import percent_change, render_comparison
from valuetrack.render.evolution import chart_points, render_evolution

__all__ = ["chart_points", "percent_change", "render_comparison", "render_evolution"]
