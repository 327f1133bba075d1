"""Single-flight entry point for bulk person imports."""
import datetime as dt
import threading
import time
import uuid
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import BinaryIO, Callable

from personapp.core.logging import logger
from personapp.schemas.imports import ImportStatusOut
from personapp.services.etl.dispatcher import RowDispatcher
from personapp.services.etl.errors import AdmissionError
from personapp.services.jobs import AdmissionGate, ImportJob, ImportState, JobRegistry, utcnow
from personapp.services.sinks import PersonSink, StatusHistorySink
from personapp.worker.tasks import ImportTaskContext, run_import_task


def _new_job_id() -> str:
    return str(uuid.uuid4())


class ImportCoordinator:
    """Admits at most one import at a time and runs it in the background.

    ``submit`` never blocks: when another import holds the gate it raises
    ``AdmissionError`` straight away. Outcomes are only visible through
    ``status`` and the status history sink.
    """

    def __init__(
        self,
        dispatcher: RowDispatcher,
        person_sink: PersonSink,
        history_sink: StatusHistorySink,
        registry: JobRegistry | None = None,
        gate: AdmissionGate | None = None,
        executor: Executor | None = None,
        row_delay: float = 0.0,
        reset_progress_on_failure: bool = False,
        csv_delimiter: str = ",",
        encoding: str = "utf-8-sig",
        clock: Callable[[], dt.datetime] = utcnow,
        sleep: Callable[[float], None] = time.sleep,
        id_factory: Callable[[], str] = _new_job_id,
    ):
        self.registry = registry if registry is not None else JobRegistry()
        self.gate = gate if gate is not None else AdmissionGate()
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="person-import")
        self.clock = clock
        self.id_factory = id_factory
        self._futures: dict[str, Future] = {}
        self._futures_lock = threading.Lock()
        self._ctx = ImportTaskContext(
            registry=self.registry,
            gate=self.gate,
            dispatcher=dispatcher,
            person_sink=person_sink,
            history_sink=history_sink,
            row_delay=row_delay,
            reset_progress_on_failure=reset_progress_on_failure,
            csv_delimiter=csv_delimiter,
            encoding=encoding,
            clock=clock,
            sleep=sleep,
        )

    def submit(self, stream: BinaryIO, file_name: str | None = None) -> str:
        if not self.gate.try_acquire():
            logger.info("import_rejected", file_name=file_name, reason="import already in progress")
            raise AdmissionError()

        job_id = None
        published = False
        try:
            job_id = self.id_factory()
            job = ImportJob(
                id=job_id,
                state=ImportState.running,
                start_time=self.clock(),
                processed_rows=0,
                file_name=file_name,
            )
            # visible to status queries before the caller gets the id back
            self.registry.put(job_id, job)
            published = True
            future = self.executor.submit(run_import_task, self._ctx, job_id, stream, file_name)
        except BaseException as e:
            # the worker never started, so the gate and the stream are still ours
            logger.exception("import_schedule_failed", job_id=job_id, error=str(e))
            try:
                if published:
                    self.registry.update(
                        job_id, lambda j: j.failed(utcnow(), f"Could not schedule import: {e}")
                    )
            finally:
                stream.close()
                self.gate.release()
            raise

        with self._futures_lock:
            self._futures[job_id] = future

        logger.info("import_submitted", job_id=job_id, file_name=file_name)
        return job_id

    def get_job(self, job_id: str) -> ImportJob | None:
        return self.registry.get(job_id)

    def status(self, job_id: str) -> ImportStatusOut | None:
        job = self.registry.get(job_id)
        if job is None:
            return None
        return ImportStatusOut.model_validate(job)

    def wait(self, job_id: str, timeout: float | None = None) -> ImportStatusOut | None:
        """Block until the job's background task has finished, then return its status."""
        with self._futures_lock:
            future = self._futures.get(job_id)
        if future is not None:
            try:
                future.result(timeout=timeout)
            except FuturesTimeoutError:
                raise
            except Exception as e:
                # already turned into a FAILED status by the worker
                logger.debug("import_task_raised", job_id=job_id, error=str(e))
        return self.status(job_id)

    @property
    def busy(self) -> bool:
        return self.gate.locked

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self.executor.shutdown(wait=wait)
