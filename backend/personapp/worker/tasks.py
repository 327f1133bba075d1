import dataclasses
import datetime as dt
import time
from contextlib import closing
from typing import BinaryIO, Callable

import structlog

from personapp.core.logging import logger
from personapp.services.etl.dispatcher import RowDispatcher
from personapp.services.etl.errors import PersistenceFailure, RowConstructionError, StreamError
from personapp.services.etl.importer import run_import
from personapp.services.etl.reader import iter_rows
from personapp.services.jobs import AdmissionGate, ImportJob, JobRegistry, utcnow
from personapp.services.sinks import PersonSink, StatusHistorySink


@dataclasses.dataclass(frozen=True)
class ImportTaskContext:
    registry: JobRegistry
    gate: AdmissionGate
    dispatcher: RowDispatcher
    person_sink: PersonSink
    history_sink: StatusHistorySink
    row_delay: float = 0.0
    reset_progress_on_failure: bool = False
    csv_delimiter: str = ","
    encoding: str = "utf-8-sig"
    clock: Callable[[], dt.datetime] = utcnow
    sleep: Callable[[float], None] = time.sleep


def _fail(ctx: ImportTaskContext, job_id: str, error: str, failed_row: int | None = None) -> ImportJob:
    def _change(job: ImportJob) -> ImportJob:
        # a job that already reached a terminal state keeps it
        if job.state.is_terminal:
            return job
        return job.failed(
            ctx.clock(),
            error,
            failed_row=failed_row,
            reset_progress=ctx.reset_progress_on_failure,
        )

    return ctx.registry.update(job_id, _change)


def _record_history(ctx: ImportTaskContext, job: ImportJob) -> None:
    try:
        ctx.history_sink.record(job)
    except Exception as e:
        logger.exception("import_status_record_failed", job_id=job.id, error=str(e))


def run_import_task(ctx: ImportTaskContext, job_id: str, stream: BinaryIO, file_name: str | None = None) -> None:
    """Background body of one import. The caller has already taken the gate for it."""
    with structlog.contextvars.bound_contextvars(job_id=job_id):
        try:
            logger.info("import_start", file_name=file_name)

            def _progress(count: int) -> None:
                ctx.registry.update(job_id, lambda job: job.with_progress(count))

            try:
                with closing(stream):
                    rows = iter_rows(stream, file_name, delimiter=ctx.csv_delimiter, encoding=ctx.encoding)
                    people = run_import(
                        rows,
                        ctx.dispatcher,
                        on_row=_progress,
                        row_delay=ctx.row_delay,
                        sleep=ctx.sleep,
                    )

                # all rows built; persist as one batch
                ctx.person_sink.save_batch(people)
                job = ctx.registry.update(job_id, lambda j: j.completed(ctx.clock()))

                logger.info(
                    "import_finished",
                    status=job.state.value,
                    rows_loaded=job.processed_rows,
                )

            except (RowConstructionError, StreamError) as e:
                job = _fail(ctx, job_id, str(e), failed_row=e.row_num)
                logger.warning("import_failed", error=str(e), row_num=e.row_num)

            except PersistenceFailure as e:
                job = _fail(ctx, job_id, str(e))
                logger.error("import_persist_failed", error=str(e))

            except Exception as e:
                logger.exception("import_failed_unexpected", error=str(e))
                job = _fail(ctx, job_id, f"Unexpected error: {e}")

            _record_history(ctx, job)

        finally:
            ctx.gate.release()
            logger.info("import_gate_released")
