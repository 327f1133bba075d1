from typing import Any, Sequence

from personapp.db.models.person import Student
from personapp.services.etl.parsers.common import person_kwargs, split_fields
from personapp.services.etl.utils import require_str, to_float, to_int

STUDENT_COLUMNS = ("university", "field_of_study", "year_of_study", "scholarship")


def parse_student(fields: Sequence[Any]) -> Student:
    base, extra = split_fields(fields, STUDENT_COLUMNS)
    university, field_of_study, year, scholarship = extra
    return Student(
        **person_kwargs(base),
        university=require_str(university, "university"),
        field_of_study=require_str(field_of_study, "field_of_study"),
        year_of_study=to_int(year, "year_of_study"),
        scholarship=to_float(scholarship, "scholarship"),
    )
