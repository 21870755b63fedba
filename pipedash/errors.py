"""Exceptions raised by pipedash."""

from typing import Optional


class PipedashError(Exception):
    """Base class for pipedash errors."""


class PipelineError(PipedashError):
    """The external pipeline could not produce a usable result."""


class PipelineCommandError(PipelineError):
    """The pipeline process failed to start or exited non-zero."""

    def __init__(self, message: str, returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class PipelineResponseError(PipelineError):
    """The pipeline printed something that is not the expected JSON."""


class ManifestValidationError(PipedashError):
    """Manifest input is incomplete; nothing was written."""
