"""Client for the external ingestion pipeline, run as a subprocess."""

import asyncio
import json
import logging
import subprocess
import tempfile
from typing import Any, List, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import Config
from ..errors import PipelineCommandError, PipelineResponseError
from ..models.run import IngestResult, ReconcileResult, Run, RunDetail, StatusResponse

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

POLL_INTERVAL = 0.05


class PipelineClient:
    """Invoke `scripts/pipeline.py` subcommands and parse their JSON output.

    Each call spawns one process and waits for it. There is no retry and no
    timeout. The process runs in its own session with output going to
    temporary files, so neither Ctrl-C nor an abandoned wait stops it.
    """

    def __init__(self, config: Config) -> None:
        """Initialize pipeline client."""
        self.config = config

    async def run_command(self, args: Sequence[str]) -> str:
        """
        Run a pipeline subcommand.

        Args:
            args: Subcommand and its flags, e.g. ["status", "--run-id", "r1"]

        Returns:
            Captured standard output

        Raises:
            PipelineCommandError: Process could not start or exited non-zero
        """
        python_path = self.config.config.python_path
        cmd = [python_path, str(self.config.script_path), *args]
        logger.debug("Running %s", " ".join(cmd))

        with tempfile.TemporaryFile() as out, tempfile.TemporaryFile() as err:
            try:
                proc = subprocess.Popen(
                    cmd,
                    cwd=str(self.config.pipeline_dir),
                    stdin=subprocess.DEVNULL,
                    stdout=out,
                    stderr=err,
                    start_new_session=True,
                )
            except OSError as e:
                raise PipelineCommandError(f"Could not start pipeline: {e}") from e

            try:
                while proc.poll() is None:
                    await asyncio.sleep(POLL_INTERVAL)
            except asyncio.CancelledError:
                logger.warning("Stopped waiting for pipeline pid %s; it keeps running", proc.pid)
                raise

            out.seek(0)
            err.seek(0)
            stdout = out.read().decode("utf-8", errors="replace")
            stderr = err.read().decode("utf-8", errors="replace")

        if proc.returncode != 0:
            raise PipelineCommandError(
                stderr.strip() or f"Process exited with code {proc.returncode}",
                returncode=proc.returncode,
            )
        return stdout

    async def run_json(self, args: Sequence[str]) -> Any:
        """Run a subcommand and decode its output as JSON."""
        raw = await self.run_command(args)
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise PipelineResponseError(f"Invalid JSON from `{args[0]}`: {e}") from e

    async def _run_model(self, args: Sequence[str], model: Type[M]) -> M:
        data = await self.run_json(args)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise PipelineResponseError(f"Unexpected response from `{args[0]}`: {e}") from e

    async def status(self) -> List[Run]:
        """List runs, newest first as ordered by the pipeline."""
        response = await self._run_model(["status"], StatusResponse)
        return response.runs

    async def run_detail(self, run_id: str) -> RunDetail:
        """Get one run with its summary and dead letters."""
        return await self._run_model(["status", "--run-id", run_id], RunDetail)

    async def ingest(self, manifest_path: str) -> IngestResult:
        """Ingest and publish every source in a manifest."""
        return await self._run_model(["ingest", "--manifest", str(manifest_path)], IngestResult)

    async def dry_run(self, manifest_path: str) -> IngestResult:
        """Process a manifest without publishing anything."""
        return await self._run_model(["dry-run", "--manifest", str(manifest_path)], IngestResult)

    async def retry(self, run_id: str) -> None:
        """Ask the pipeline to retry the failed parts of a run."""
        await self.run_command(["retry", "--run-id", run_id])

    async def reconcile_links(self, scope: str = "all") -> int:
        """
        Resolve previously unresolved links.

        Returns:
            Number of links resolved
        """
        result = await self._run_model(["reconcile-links", "--scope", scope], ReconcileResult)
        return result.resolved
