from typing import Any, Sequence

from personapp.db.models.person import Retiree
from personapp.services.etl.parsers.common import person_kwargs, split_fields
from personapp.services.etl.utils import to_float, to_int

RETIREE_COLUMNS = ("pension", "years_worked")


def parse_retiree(fields: Sequence[Any]) -> Retiree:
    base, extra = split_fields(fields, RETIREE_COLUMNS)
    pension, years_worked = extra
    return Retiree(
        **person_kwargs(base),
        pension=to_float(pension, "pension"),
        years_worked=to_int(years_worked, "years_worked"),
    )
