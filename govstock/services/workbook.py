# govstock/services/workbook.py
"""Read/write access to the first worksheet of an uploaded .xlsx file."""
import io
import json
import logging
from typing import List, Optional, Sequence

import openpyxl
from openpyxl.workbook import Workbook

from govstock.exceptions import CodecError
from govstock.models import StockImpact

logger = logging.getLogger(__name__)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

LIKELIHOOD_COL = 5  # E
STOCKS_COL = 6      # F


def stocks_json(stocks: Sequence[StockImpact]) -> str:
    """Compact JSON used for the stocks cell, e.g. [{"symbol":"XOM","impact":false}]."""
    return json.dumps([s.model_dump() for s in stocks], separators=(",", ":"))


class BillSheet:
    def __init__(self, workbook: Workbook, values: Optional[List[tuple]] = None):
        self.workbook = workbook
        self.sheet = workbook.worksheets[0]
        # cached formula results, as last saved by Excel
        self._values = values

    @classmethod
    def from_bytes(cls, data: bytes) -> "BillSheet":
        try:
            wb = openpyxl.load_workbook(io.BytesIO(data))
            cached = openpyxl.load_workbook(io.BytesIO(data), data_only=True)
        except Exception as e:
            raise CodecError(f"Could not read Excel workbook: {e}") from e
        if not wb.worksheets:
            raise CodecError("Excel workbook has no worksheets")
        values = list(cached.worksheets[0].iter_rows(values_only=True))
        cached.close()
        return cls(wb, values)

    def rows(self) -> List[tuple]:
        """
        All rows of the sheet, row 0 being worksheet line 1. Formula cells
        give their cached result (None if the file was never calculated).
        """
        if self._values is not None:
            return list(self._values)
        return list(self.sheet.iter_rows(values_only=True))

    def write_result(self, line: int, likelihood: Optional[int], stocks: Sequence[StockImpact]) -> None:
        self.sheet.cell(row=line, column=LIKELIHOOD_COL, value=likelihood)
        self.sheet.cell(row=line, column=STOCKS_COL, value=stocks_json(stocks))

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        try:
            self.workbook.save(buf)
        except Exception as e:
            raise CodecError(f"Could not write Excel workbook: {e}") from e
        finally:
            self.workbook.close()
        out = buf.getvalue()
        logger.info("Encoded workbook: %d bytes", len(out))
        return out
