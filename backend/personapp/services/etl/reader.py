import csv
import io
import zipfile
from typing import Any, BinaryIO, Iterator

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from personapp.services.etl.errors import StreamError

Row = tuple[int, list[Any]]


def is_xlsx(file_name: str | None) -> bool:
    return bool(file_name) and file_name.lower().endswith(".xlsx")


def iter_rows(
    stream: BinaryIO,
    file_name: str | None = None,
    delimiter: str = ",",
    encoding: str = "utf-8-sig",
) -> Iterator[Row]:
    """Yield ``(row_num, cells)`` in file order; row numbers are 1-based.

    Read failures surface as ``StreamError`` carrying the number of the
    row that could not be read.
    """
    if is_xlsx(file_name):
        yield from _iter_xlsx_rows(stream)
    else:
        yield from _iter_csv_rows(stream, delimiter=delimiter, encoding=encoding)


def _iter_csv_rows(stream: BinaryIO, delimiter: str, encoding: str) -> Iterator[Row]:
    text = io.TextIOWrapper(stream, encoding=encoding, newline="")
    row_num = 0
    try:
        for row_num, row in enumerate(csv.reader(text, delimiter=delimiter), start=1):
            yield row_num, row
    except (csv.Error, UnicodeDecodeError, OSError) as e:
        raise StreamError(f"Cannot read row: {e}", row_num=row_num + 1) from e
    finally:
        # leave the caller's stream open
        try:
            text.detach()
        except ValueError:
            pass


def _iter_xlsx_rows(stream: BinaryIO) -> Iterator[Row]:
    try:
        wb = openpyxl.load_workbook(stream, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise StreamError(f"Cannot open workbook: {e}") from e
    row_num = 0
    try:
        ws = wb.worksheets[0]
        for row_num, row in enumerate(ws.iter_rows(values_only=True), start=1):
            yield row_num, list(row)
    except (zipfile.BadZipFile, KeyError, OSError) as e:
        raise StreamError(f"Cannot read row: {e}", row_num=row_num + 1) from e
    finally:
        wb.close()
