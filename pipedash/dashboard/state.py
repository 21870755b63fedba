"""Dashboard state and the operations that update it."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Dict, List, Optional

import pendulum

from ..errors import PipelineError
from ..models.run import Run, RunDetail

if TYPE_CHECKING:
    from ..pipeline.client import PipelineClient

logger = logging.getLogger(__name__)


@dataclass
class DashboardState:
    """
    Everything the dashboard renders.

    Attributes:
        runs: Runs from the last successful status query
        details: Loaded run details by run id; a run with a detail is expanded
        error: Text of the last failed status query, cleared on success
        refreshed_at: When the last status query finished
    """

    runs: List[Run] = field(default_factory=list)
    details: Dict[str, RunDetail] = field(default_factory=dict)
    error: Optional[str] = None
    refreshed_at: Optional[datetime] = None

    def is_expanded(self, run_id: str) -> bool:
        return run_id in self.details


async def refresh(state: DashboardState, client: "PipelineClient") -> DashboardState:
    """
    Reload the run list.

    A failed query records its message and keeps the previous runs, so the
    dashboard stays usable. Expanded details are fetched again so their
    counts stay current; one that can no longer be loaded is collapsed.
    """
    try:
        runs = await client.status()
    except PipelineError as e:
        state.error = f"Error loading runs: {e}"
    else:
        state.runs = runs
        state.error = None
        known = {run.id for run in runs}
        state.details = {k: v for k, v in state.details.items() if k in known}
        for run_id in list(state.details):
            try:
                state.details[run_id] = await client.run_detail(run_id)
            except PipelineError as e:
                logger.warning("Could not reload run %s: %s", run_id, e)
                collapse(state, run_id)
    state.refreshed_at = pendulum.now()
    return state


async def load_detail(state: DashboardState, client: "PipelineClient", run_id: str) -> RunDetail:
    """Fetch a run's detail and expand it. Errors propagate to the caller."""
    detail = await client.run_detail(run_id)
    state.details[run_id] = detail
    return detail


def collapse(state: DashboardState, run_id: str) -> None:
    """Hide a run's detail."""
    state.details.pop(run_id, None)
