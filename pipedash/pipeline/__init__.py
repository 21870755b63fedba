"""Access to the external ingestion pipeline."""

from .client import PipelineClient
from .poller import StatusPoller

__all__ = ["PipelineClient", "StatusPoller"]
