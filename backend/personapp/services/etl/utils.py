import datetime as dt
from typing import Any

from personapp.services.etl.errors import RowConstructionError

DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y")


def norm_str(v: Any) -> str | None:
    if v is None:
        return None
    if isinstance(v, str):
        s = v.strip()
        return s if s else None
    return str(v).strip()


def is_blank_row(row: list[Any]) -> bool:
    return all(norm_str(v) is None for v in row)


def trim_trailing_blanks(row: list[Any]) -> list[Any]:
    end = len(row)
    while end > 0 and norm_str(row[end - 1]) is None:
        end -= 1
    return list(row[:end])


def require_str(v: Any, column: str) -> str:
    s = norm_str(v)
    if s is None:
        raise RowConstructionError("Missing value", column=column)
    return s


def to_float(v: Any, column: str) -> float:
    if isinstance(v, bool):
        raise RowConstructionError(f"Not a number: {v!r}", column=column)
    if isinstance(v, (int, float)):
        return float(v)
    s = norm_str(v)
    if s is None:
        raise RowConstructionError("Missing value", column=column)
    try:
        return float(s.replace(" ", "").replace(",", "."))
    except ValueError:
        raise RowConstructionError(f"Not a number: {s!r}", column=column) from None


def to_int(v: Any, column: str) -> int:
    if isinstance(v, float) and v.is_integer():
        return int(v)
    if isinstance(v, int) and not isinstance(v, bool):
        return v
    s = norm_str(v)
    if s is None:
        raise RowConstructionError("Missing value", column=column)
    try:
        return int(s)
    except ValueError:
        raise RowConstructionError(f"Not an integer: {s!r}", column=column) from None


def to_date(v: Any, column: str) -> dt.date:
    if isinstance(v, dt.datetime):
        return v.date()
    if isinstance(v, dt.date):
        return v
    s = norm_str(v)
    if s is None:
        raise RowConstructionError("Missing value", column=column)
    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(s, fmt).date()
        except ValueError:
            pass
    raise RowConstructionError(f"Not a date: {s!r}", column=column)
