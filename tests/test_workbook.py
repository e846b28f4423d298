"""Workbook codec and result sinks."""

from __future__ import annotations

import io
import json

import openpyxl
import pytest

from govstock.exceptions import CodecError
from govstock.models import EnrichedBill, StockImpact
from govstock.services.sinks import JsonSink, SpreadsheetSink
from govstock.services.workbook import XLSX_MIME, BillSheet, stocks_json

from conftest import BILL, HEADER, make_xlsx


def _enriched(row: int = 2, likelihood: int | None = 73) -> EnrichedBill:
    return EnrichedBill(
        name="H.R. 1",
        description="A bill",
        pdf_url="http://x/doc.pdf",
        history_text="passed committee",
        row=row,
        likelihood=likelihood,
        stocks=[StockImpact(symbol="XOM", impact=False)],
    )


def _load(data: bytes):
    return openpyxl.load_workbook(io.BytesIO(data)).worksheets[0]


def test_rows_roundtrip_first_sheet(single_bill_xlsx: bytes) -> None:
    sheet = BillSheet.from_bytes(single_bill_xlsx)
    assert sheet.rows() == [tuple(HEADER), tuple(BILL)]


def test_only_first_worksheet_is_read() -> None:
    wb = openpyxl.Workbook()
    wb.active.append(HEADER)
    wb.create_sheet("Other").append(["ignored"])
    buf = io.BytesIO()
    wb.save(buf)
    assert BillSheet.from_bytes(buf.getvalue()).rows() == [tuple(HEADER)]


@pytest.mark.parametrize("data", [b"", b"not a workbook", b"PK\x03\x04garbage"])
def test_unreadable_workbook_raises_codec_error(data: bytes) -> None:
    with pytest.raises(CodecError):
        BillSheet.from_bytes(data)


def test_stocks_json_is_compact() -> None:
    assert stocks_json([StockImpact(symbol="XOM", impact=False)]) == '[{"symbol":"XOM","impact":false}]'
    assert stocks_json([]) == "[]"


def test_spreadsheet_sink_writes_e_and_f(single_bill_xlsx: bytes) -> None:
    sheet = BillSheet.from_bytes(single_bill_xlsx)
    out = SpreadsheetSink().write(sheet, [_enriched()])

    ws = _load(out)
    assert ws["E2"].value == 73
    assert ws["E2"].data_type == "n"
    assert ws["F2"].value == '[{"symbol":"XOM","impact":false}]'
    assert ws["F2"].data_type == "s"
    assert [c.value for c in ws[1]][:4] == HEADER
    assert [c.value for c in ws[2]][:4] == BILL
    assert ws["E1"].value is None
    assert ws["F1"].value is None


def test_spreadsheet_sink_uses_record_line() -> None:
    data = make_xlsx([HEADER, ["skip", "", None, None], BILL])
    sheet = BillSheet.from_bytes(data)
    ws = _load(SpreadsheetSink().write(sheet, [_enriched(row=3, likelihood=None)]))
    assert ws["E2"].value is None
    assert ws["F2"].value is None
    assert ws["E3"].value is None
    assert json.loads(ws["F3"].value) == [{"symbol": "XOM", "impact": False}]


def test_spreadsheet_sink_response_headers() -> None:
    resp = SpreadsheetSink().to_response(b"xlsx-bytes")
    assert resp.body == b"xlsx-bytes"
    assert resp.media_type == XLSX_MIME
    assert resp.headers["content-disposition"] == 'attachment; filename="results.xlsx"'


def test_json_sink_payload(single_bill_xlsx: bytes) -> None:
    sheet = BillSheet.from_bytes(single_bill_xlsx)
    payload = JsonSink().write(sheet, [_enriched(likelihood=None)])
    assert payload == {
        "results": [
            {
                "name": "H.R. 1",
                "description": "A bill",
                "pdfUrl": "http://x/doc.pdf",
                "historyText": "passed committee",
                "likelihood": None,
                "stocks": [{"symbol": "XOM", "impact": False}],
            }
        ]
    }
    resp = JsonSink().to_response(payload)
    assert json.loads(resp.body) == payload


def test_formula_cells_read_as_cached_values_and_survive_rewrite() -> None:
    # openpyxl stores no cached result, so the read side sees an empty cell
    data = make_xlsx([HEADER, ["H.R. 2", "Linked", '=HYPERLINK("http://x/2.pdf")', "introduced"]])
    sheet = BillSheet.from_bytes(data)
    assert sheet.rows()[1][2] is None

    ws = _load(SpreadsheetSink().write(sheet, [_enriched()]))
    assert ws["C2"].value == '=HYPERLINK("http://x/2.pdf")'
    assert ws["E2"].value == 73
