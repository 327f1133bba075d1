"""In-process job tracking for bulk imports.

``ImportJob`` values are immutable snapshots. The worker that owns a job
publishes every change as a new snapshot through ``JobRegistry``, so a
reader always sees a whole record.
"""
import dataclasses
import datetime as dt
import threading
from enum import Enum
from typing import Callable


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class ImportState(str, Enum):
    pending = "pending"
    running = "running"
    completed = "completed"
    failed = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ImportState.completed, ImportState.failed)


@dataclasses.dataclass(frozen=True)
class ImportJob:
    id: str
    state: ImportState
    start_time: dt.datetime
    end_time: dt.datetime | None = None
    processed_rows: int = 0
    file_name: str | None = None
    error: str | None = None
    failed_row: int | None = None

    def _ensure_active(self) -> None:
        if self.state.is_terminal:
            raise ValueError(f"Import job {self.id} is already {self.state.value}")

    def with_progress(self, processed_rows: int) -> "ImportJob":
        self._ensure_active()
        if processed_rows < self.processed_rows:
            raise ValueError("processed_rows must not decrease")
        return dataclasses.replace(self, state=ImportState.running, processed_rows=processed_rows)

    def completed(self, when: dt.datetime) -> "ImportJob":
        self._ensure_active()
        return dataclasses.replace(self, state=ImportState.completed, end_time=when)

    def failed(
        self,
        when: dt.datetime,
        error: str,
        failed_row: int | None = None,
        reset_progress: bool = False,
    ) -> "ImportJob":
        self._ensure_active()
        return dataclasses.replace(
            self,
            state=ImportState.failed,
            end_time=when,
            error=error,
            failed_row=failed_row,
            processed_rows=0 if reset_progress else self.processed_rows,
        )


class JobRegistry:
    """Thread-safe job id -> latest snapshot map. Entries are never evicted."""

    def __init__(self):
        self._jobs: dict[str, ImportJob] = {}
        self._lock = threading.Lock()

    def put(self, job_id: str, job: ImportJob) -> None:
        with self._lock:
            self._jobs[job_id] = job

    def get(self, job_id: str) -> ImportJob | None:
        with self._lock:
            return self._jobs.get(job_id)

    def update(self, job_id: str, change: Callable[[ImportJob], ImportJob]) -> ImportJob:
        """Apply ``change`` to the current snapshot and publish the result atomically."""
        with self._lock:
            job = self._jobs[job_id]
            new = change(job)
            self._jobs[job_id] = new
            return new

    def __contains__(self, job_id: object) -> bool:
        with self._lock:
            return job_id in self._jobs

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)


class AdmissionGate:
    """Single holder, never queued, never re-entrant."""

    def __init__(self):
        self._lock = threading.Lock()

    def try_acquire(self) -> bool:
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        if not self._lock.locked():
            raise RuntimeError("Admission gate released while not held")
        self._lock.release()

    @property
    def locked(self) -> bool:
        return self._lock.locked()
