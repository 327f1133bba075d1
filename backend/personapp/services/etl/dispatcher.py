from typing import Any, Callable, Iterable, Mapping, Sequence

from personapp.services.etl.errors import UnknownRowTypeError
from personapp.services.etl.parsers.employee import parse_employee
from personapp.services.etl.parsers.retiree import parse_retiree
from personapp.services.etl.parsers.student import parse_student
from personapp.services.etl.utils import norm_str

RowFactory = Callable[[Sequence[Any]], Any]


def _norm_tag(tag: Any) -> str | None:
    s = norm_str(tag)
    return s.upper() if s else None


class RowDispatcher:
    """Maps a row's type tag to the factory that builds its record.

    Tags are matched case-insensitively. Factories receive the cells that
    follow the tag and either return a record or raise
    ``RowConstructionError``.
    """

    def __init__(self, factories: Mapping[str, RowFactory] | None = None):
        self._factories: dict[str, RowFactory] = {}
        for tag, factory in (factories or {}).items():
            self.register(tag, factory)

    @property
    def tags(self) -> list[str]:
        return sorted(self._factories)

    def register(self, tag: str, factory: RowFactory) -> None:
        key = _norm_tag(tag)
        if key is None:
            raise ValueError("Row type tag must not be blank")
        self._factories[key] = factory

    def resolve(self, tag: Any) -> RowFactory:
        key = _norm_tag(tag)
        if key is None:
            raise UnknownRowTypeError("Missing row type", column="type")
        try:
            return self._factories[key]
        except KeyError:
            raise UnknownRowTypeError(
                f"Unknown row type: {tag!r}, expected one of {', '.join(self.tags)}", column="type"
            ) from None

    def construct(self, row: Iterable[Any]) -> Any:
        cells = list(row)
        factory = self.resolve(cells[0] if cells else None)
        return factory(cells[1:])


def default_dispatcher() -> RowDispatcher:
    return RowDispatcher(
        {
            "EMPLOYEE": parse_employee,
            "STUDENT": parse_student,
            "RETIREE": parse_retiree,
        }
    )
