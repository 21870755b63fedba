"""Terminal dashboard and manifest builder for an external ingestion pipeline."""

__version__ = "0.1.0"
