from typing import Any, Sequence

from personapp.services.etl.errors import RowConstructionError
from personapp.services.etl.utils import require_str, to_float, trim_trailing_blanks

PERSON_COLUMNS = ("first_name", "last_name", "pesel", "height", "weight", "email")


def split_fields(fields: Sequence[Any], extra_columns: Sequence[str]) -> tuple[list[Any], list[Any]]:
    """Split the cells after the type tag into common person cells and variant cells."""
    cells = trim_trailing_blanks(list(fields))
    expected = len(PERSON_COLUMNS) + len(extra_columns)
    if len(cells) < expected:
        missing = (list(PERSON_COLUMNS) + list(extra_columns))[len(cells)]
        raise RowConstructionError(
            f"Expected {expected} fields after type, got {len(cells)}", column=missing
        )
    if len(cells) > expected:
        raise RowConstructionError(f"Expected {expected} fields after type, got {len(cells)}")
    return cells[: len(PERSON_COLUMNS)], cells[len(PERSON_COLUMNS):]


def person_kwargs(cells: Sequence[Any]) -> dict[str, Any]:
    first_name, last_name, pesel, height, weight, email = cells
    return {
        "first_name": require_str(first_name, "first_name"),
        "last_name": require_str(last_name, "last_name"),
        "pesel": require_str(pesel, "pesel"),
        "height": to_float(height, "height"),
        "weight": to_float(weight, "weight"),
        "email": require_str(email, "email"),
    }
