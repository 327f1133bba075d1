import io

import openpyxl
import pytest

from personapp.services.etl.errors import StreamError
from personapp.services.etl.reader import iter_rows


def test_csv_rows_in_order_with_numbers():
    stream = io.BytesIO("EMPLOYEE,Jan\n\nSTUDENT,\"Anna, Maria\"\n".encode("utf-8"))
    assert list(iter_rows(stream, "people.csv")) == [
        (1, ["EMPLOYEE", "Jan"]),
        (2, []),
        (3, ["STUDENT", "Anna, Maria"]),
    ]
    assert not stream.closed


def test_csv_custom_delimiter_and_bom():
    stream = io.BytesIO("\ufeffRETIREE;Jan;1\n".encode("utf-8"))
    assert list(iter_rows(stream, delimiter=";")) == [(1, ["RETIREE", "Jan", "1"])]


def test_csv_decode_error_is_stream_error():
    stream = io.BytesIO(b"A,ok\nA,\xff\xfe\xfa\n")
    with pytest.raises(StreamError):
        list(iter_rows(stream, "bad.csv", encoding="utf-8"))


def test_xlsx_rows(tmp_path):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["EMPLOYEE", "Jan", 180])
    ws.append(["RETIREE", "Ewa", 160.5])
    out = tmp_path / "people.xlsx"
    wb.save(out)

    with out.open("rb") as f:
        rows = list(iter_rows(f, "People.XLSX"))
    assert rows[0] == (1, ["EMPLOYEE", "Jan", 180])
    assert rows[1] == (2, ["RETIREE", "Ewa", 160.5])
    assert len(rows) == 2


def test_xlsx_garbage_is_stream_error():
    with pytest.raises(StreamError, match="Cannot open workbook"):
        list(iter_rows(io.BytesIO(b"not a zip"), "people.xlsx"))
