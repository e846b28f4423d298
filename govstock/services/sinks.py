# govstock/services/sinks.py
"""Output formats for enriched bills: a JSON payload or the rewritten workbook."""
from abc import ABC, abstractmethod
from typing import Any, Sequence

from fastapi.responses import JSONResponse, Response

from govstock.models import AnalysisResponse, EnrichedBill
from .workbook import XLSX_MIME, BillSheet


class ResultSink(ABC):
    @abstractmethod
    def write(self, sheet: BillSheet, results: Sequence[EnrichedBill]) -> Any:
        """Turn enriched results into this sink's payload."""

    @abstractmethod
    def to_response(self, payload: Any) -> Response:
        ...


class JsonSink(ResultSink):
    def write(self, sheet: BillSheet, results: Sequence[EnrichedBill]) -> dict:
        return AnalysisResponse(results=list(results)).model_dump(by_alias=True)

    def to_response(self, payload: dict) -> Response:
        return JSONResponse(payload)


class SpreadsheetSink(ResultSink):
    """Likelihood into column E, stocks JSON into column F, A-D untouched."""

    filename = "results.xlsx"

    def write(self, sheet: BillSheet, results: Sequence[EnrichedBill]) -> bytes:
        for bill in results:
            sheet.write_result(bill.row, bill.likelihood, bill.stocks)
        return sheet.to_bytes()

    def to_response(self, payload: bytes) -> Response:
        return Response(
            content=payload,
            media_type=XLSX_MIME,
            headers={"Content-Disposition": f'attachment; filename="{self.filename}"'},
        )
