"""Shared fixtures: a throwaway pipeline checkout driven by canned responses."""

import json
import sys
from pathlib import Path

import pytest

from pipedash.config import Config, ConfigModel

FAKE_PIPELINE = '''\
import json
import sys
from pathlib import Path

args = sys.argv[1:]
with open("calls.jsonl", "a") as f:
    f.write(json.dumps(args) + "\\n")

responses = json.loads(Path("responses.json").read_text())
key = args[0]
if key == "status" and "--run-id" in args:
    key = "status --run-id"
response = responses.get(key, {"stdout": "{}"})
sys.stdout.write(response.get("stdout", ""))
sys.stderr.write(response.get("stderr", ""))
sys.exit(response.get("code", 0))
'''


class FakePipeline:
    """Writes canned responses for the fake pipeline script and reads back its calls."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.responses: dict = {}
        self._save()

    def _save(self) -> None:
        (self.root / "responses.json").write_text(json.dumps(self.responses))

    def respond(self, key: str, payload=None, *, stdout: str = None, stderr: str = "", code: int = 0) -> None:
        if stdout is None:
            stdout = json.dumps(payload if payload is not None else {})
        self.responses[key] = {"stdout": stdout, "stderr": stderr, "code": code}
        self._save()

    @property
    def calls(self) -> list:
        path = self.root / "calls.jsonl"
        if not path.exists():
            return []
        return [json.loads(line) for line in path.read_text().splitlines() if line]


@pytest.fixture
def pipeline_dir(tmp_path: Path) -> Path:
    root = tmp_path / "pipeline"
    (root / "scripts").mkdir(parents=True)
    (root / "scripts" / "pipeline.py").write_text(FAKE_PIPELINE)
    return root


@pytest.fixture
def fake_pipeline(pipeline_dir: Path) -> FakePipeline:
    return FakePipeline(pipeline_dir)


@pytest.fixture
def config(tmp_path: Path, pipeline_dir: Path) -> Config:
    model = ConfigModel(pipeline_dir=str(pipeline_dir), python_path=sys.executable)
    return Config(tmp_path / "config.yaml", model=model)


@pytest.fixture
def make_pdf(tmp_path: Path):
    """Create a PDF-named file with given content under tmp_path/drop."""

    def _make(name: str, content: bytes = b"%PDF-1.4 test", folder: str = "drop") -> Path:
        directory = tmp_path / folder
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_bytes(content)
        return path

    return _make


RUN_ROWS = [
    {
        "id": "run-2",
        "command": "ingest",
        "manifest_path": "data/manifests/grays.manifest.csv",
        "dry_run": 0,
        "status": "partial_failed",
        "error": None,
        "created_at": "2026-10-17T10:15:00Z",
    },
    {
        "id": "run-1",
        "command": "dry-run",
        "manifest_path": None,
        "dry_run": 1,
        "status": "done",
        "error": None,
        "created_at": "2026-10-16T09:00:00Z",
    },
]

RUN_DETAIL = {
    "run": RUN_ROWS[0],
    "summary": {
        "run_id": "run-2",
        "sources": {"published": 3, "failed": 1},
        "dead_letters": 1,
        "unresolved_links": 4,
    },
    "dead_letters": [{"id": 7, "stage": "parse", "error": "bad xref table", "retried": 0}],
}


@pytest.fixture
def run_rows() -> list:
    return json.loads(json.dumps(RUN_ROWS))


@pytest.fixture
def run_detail() -> dict:
    return json.loads(json.dumps(RUN_DETAIL))
