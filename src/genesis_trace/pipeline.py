"""Job results of a CI-style run and the exit code derived from them."""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterable
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .exceptions import ResultsFileError

JobStatus = Literal["success", "failed", "skipped"]


class JobResult(BaseModel):
    """Outcome of one pipeline job."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    job: str
    status: JobStatus
    duration_ms: float = Field(default=0.0, ge=0)
    warnings: int = Field(default=0, ge=0)
    error: str | None = None


def pipeline_exit_code(results: Iterable[JobResult]) -> int:
    """0 when no job failed, 1 otherwise; nothing else is considered."""
    return 1 if any(result.status == "failed" for result in results) else 0


def status_counts(results: Iterable[JobResult]) -> dict[str, int]:
    counts = Counter(result.status for result in results)
    return {status: counts.get(status, 0) for status in ("success", "failed", "skipped")}


_RESULTS = TypeAdapter(list[JobResult])


def load_results(path: Path) -> list[JobResult]:
    """Read a JSON array of job results, or an object with a ``jobs`` array."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ResultsFileError(f"Failed reading results file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ResultsFileError(f"Results file {path} is not valid JSON: {exc}") from exc
    if isinstance(payload, dict):
        payload = payload.get("jobs", [])
    try:
        return _RESULTS.validate_python(payload)
    except ValidationError as exc:
        raise ResultsFileError(f"Invalid job results in {path}: {exc}") from exc
