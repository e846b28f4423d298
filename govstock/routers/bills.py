# govstock/routers/bills.py
import logging

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import Response

from govstock.exceptions import InvalidUploadError
from govstock.models import AnalysisResponse, ErrorResponse
from govstock.services.enricher import enrich
from govstock.services.llm_groq import QueryClient
from govstock.services.rows import eligible_records
from govstock.services.sinks import JsonSink, ResultSink, SpreadsheetSink
from govstock.services.workbook import XLSX_MIME, BillSheet

logger = logging.getLogger(__name__)

router = APIRouter()

ERRORS = {400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def get_query_client(request: Request) -> QueryClient:
    return request.app.state.query_client


async def run_pipeline(excel: UploadFile | None, client: QueryClient, sink: ResultSink) -> Response:
    """Decode the upload, enrich every eligible row and hand the results to the sink."""
    if excel is None:
        raise InvalidUploadError("Missing Excel file upload")
    try:
        sheet = BillSheet.from_bytes(await excel.read())
        records = eligible_records(sheet.rows())
        logger.info("Upload %r: %d eligible bills", excel.filename, len(records))
        results = await enrich(records, client)
        return sink.to_response(sink.write(sheet, results))
    finally:
        await excel.close()


@router.post("/analyze", response_model=AnalysisResponse, responses=ERRORS)
async def analyze(
    excel: UploadFile | None = File(None),
    client: QueryClient = Depends(get_query_client),
):
    return await run_pipeline(excel, client, JsonSink())


@router.post(
    "/analyze-excel",
    response_class=Response,
    responses={200: {"content": {XLSX_MIME: {}}}, **ERRORS},
)
async def analyze_excel(
    excel: UploadFile | None = File(None),
    client: QueryClient = Depends(get_query_client),
):
    return await run_pipeline(excel, client, SpreadsheetSink())
