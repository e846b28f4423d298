# govstock/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

from govstock.exceptions import GovStockError, InvalidUploadError
from govstock.logger import setup_logging
from govstock.routers import bills
from govstock.services.llm_groq import GroqQueryClient

load_dotenv()
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.query_client = GroqQueryClient()
    try:
        yield
    finally:
        await app.state.query_client.aclose()


app = FastAPI(title="GovStock Bill Analyzer", lifespan=lifespan)

# keep permissive in dev; tighten for prod
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

@app.exception_handler(RequestValidationError)
async def invalid_form(request: Request, exc: RequestValidationError):
    logger.warning("Form parse error: %s", exc.errors())
    return JSONResponse({"error": "Invalid form data"}, status_code=400)

@app.exception_handler(InvalidUploadError)
async def invalid_upload(request: Request, exc: InvalidUploadError):
    return JSONResponse({"error": str(exc)}, status_code=400)

@app.exception_handler(GovStockError)
async def processing_error(request: Request, exc: GovStockError):
    logger.exception("Processing error", exc_info=exc)
    return JSONResponse({"error": str(exc)}, status_code=500)

@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception):
    logger.exception("Unexpected processing error", exc_info=exc)
    return JSONResponse({"error": str(exc)}, status_code=500)


@app.get("/health")
def health():
    return {"ok": True}

app.include_router(bills.router, prefix="/bills", tags=["bills"])
