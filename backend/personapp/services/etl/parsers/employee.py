from typing import Any, Sequence

from personapp.db.models.person import Employee
from personapp.services.etl.parsers.common import person_kwargs, split_fields
from personapp.services.etl.utils import require_str, to_date, to_float

EMPLOYEE_COLUMNS = ("current_position", "current_salary", "employment_start")


def parse_employee(fields: Sequence[Any]) -> Employee:
    base, extra = split_fields(fields, EMPLOYEE_COLUMNS)
    position, salary, start = extra
    return Employee(
        **person_kwargs(base),
        current_position=require_str(position, "current_position"),
        current_salary=to_float(salary, "current_salary"),
        employment_start=to_date(start, "employment_start"),
    )
