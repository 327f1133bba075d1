import dataclasses
import threading
from typing import Any

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from personapp.db.base import Base
import personapp.db.models  # noqa: F401
from personapp.db.session import make_session_factory
from personapp.services.coordinator import ImportCoordinator
from personapp.services.etl.dispatcher import RowDispatcher
from personapp.services.etl.utils import require_str, to_float


@dataclasses.dataclass
class Rec:
    tag: str
    name: str
    value: float


def make_a(fields):
    return Rec("A", require_str(fields[0], "name"), to_float(fields[1], "value"))


def make_b(fields):
    return Rec("B", require_str(fields[0], "name"), to_float(fields[1], "value"))


class ListPersonSink:
    def __init__(self, error: Exception | None = None):
        self.batches: list[list[Any]] = []
        self.error = error

    def save_batch(self, records):
        if self.error is not None:
            raise self.error
        self.batches.append(list(records))


class ListHistorySink:
    def __init__(self, error: Exception | None = None):
        self.records = []
        self.error = error

    def record(self, job):
        if self.error is not None:
            raise self.error
        self.records.append(job)


class Hold:
    """Parks the worker inside the first factory call until released."""

    def __init__(self):
        self.entered = threading.Event()
        self.released = threading.Event()

    def wrap(self, factory):
        def _held(fields):
            self.entered.set()
            assert self.released.wait(5), "worker was never released"
            return factory(fields)
        return _held


@pytest.fixture
def dispatcher():
    return RowDispatcher({"A": make_a, "B": make_b})


@pytest.fixture
def person_sink():
    return ListPersonSink()


@pytest.fixture
def history_sink():
    return ListHistorySink()


@pytest.fixture
def make_coordinator(dispatcher, person_sink, history_sink):
    created = []

    def _make(**kwargs):
        kwargs.setdefault("dispatcher", dispatcher)
        kwargs.setdefault("person_sink", person_sink)
        kwargs.setdefault("history_sink", history_sink)
        c = ImportCoordinator(**kwargs)
        created.append(c)
        return c

    yield _make
    for c in created:
        c.shutdown(wait=True)


@pytest.fixture
def coordinator(make_coordinator):
    return make_coordinator()


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield make_session_factory(engine)
    engine.dispose()
