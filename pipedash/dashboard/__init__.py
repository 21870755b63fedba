"""Dashboard state and rendering."""

from .render import fmt_time, render_dashboard, render_detail, render_run_table
from .state import DashboardState, collapse, load_detail, refresh

__all__ = [
    "DashboardState",
    "collapse",
    "fmt_time",
    "load_detail",
    "refresh",
    "render_dashboard",
    "render_detail",
    "render_run_table",
]
