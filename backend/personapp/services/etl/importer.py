import time
from typing import Any, Callable, Iterable

from personapp.core.logging import logger
from personapp.services.etl.dispatcher import RowDispatcher
from personapp.services.etl.errors import RowConstructionError
from personapp.services.etl.reader import Row
from personapp.services.etl.utils import is_blank_row


def run_import(
    rows: Iterable[Row],
    dispatcher: RowDispatcher,
    on_row: Callable[[int], None] | None = None,
    row_delay: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> list[Any]:
    """Build one record per non-empty row, in file order.

    ``on_row`` is called with the running count after every record.
    The first bad row aborts the whole import with ``RowConstructionError``.
    """
    records: list[Any] = []
    for row_num, row in rows:
        if not row or is_blank_row(row):
            continue
        try:
            factory = dispatcher.resolve(row[0])
            record = factory(row[1:])
        except RowConstructionError as e:
            e.row_num = row_num
            raise
        except (ValueError, TypeError, IndexError) as e:
            raise RowConstructionError(f"Malformed row: {e}", row_num=row_num) from e
        if row_delay > 0:
            sleep(row_delay)
        if record is None:
            logger.warning("import_row_skipped", row_num=row_num)
            continue
        records.append(record)
        if on_row is not None:
            on_row(len(records))
    return records
