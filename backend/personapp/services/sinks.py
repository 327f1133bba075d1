from typing import Any, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from personapp.core.logging import logger
from personapp.crud.imports import add_import_status
from personapp.crud.people import save_all
from personapp.services.etl.errors import PersistenceFailure
from personapp.services.jobs import ImportJob


class PersonSink(Protocol):
    def save_batch(self, records: Sequence[Any]) -> None: ...


class StatusHistorySink(Protocol):
    def record(self, job: ImportJob) -> None: ...


class SqlPersonSink:
    """Writes the whole batch in one transaction."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def save_batch(self, records: Sequence[Any]) -> None:
        db = self.session_factory()
        try:
            saved = save_all(db, records)
            logger.info("people_saved", count=saved)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceFailure(f"Bulk save failed: {e}") from e
        finally:
            db.close()


class SqlStatusHistorySink:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def record(self, job: ImportJob) -> None:
        db = self.session_factory()
        try:
            add_import_status(db, job)
        except SQLAlchemyError:
            db.rollback()
            raise
        finally:
            db.close()
