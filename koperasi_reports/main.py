import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn

from koperasi_reports.config import settings
from koperasi_reports.database import db
from koperasi_reports.exceptions import AggregationFailure, ReportRequestError
from koperasi_reports.logging_config import configure_logging, request_id_var
from koperasi_reports.api import reports

# Setup Logging
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

@asynccontextmanager
async def lifespan(app: FastAPI):
    db.connect()
    yield
    db.close()

app = FastAPI(
    title="Koperasi Financial Reports API",
    description="Trial balance, balance sheet, income statement and cash flow for the koperasi ledger",
    version="1.0.0",
    lifespan=lifespan
)

@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag the request with a correlation id and open CORS on every response."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    token = request_id_var.set(request_id)
    try:
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(f"Unexpected error: {e}")
            response = JSONResponse(
                status_code=500,
                content={"error": "Internal server error", "details": str(e)}
            )
        response.headers.update(CORS_HEADERS)
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        request_id_var.reset(token)

@app.exception_handler(ReportRequestError)
async def report_request_error_handler(request: Request, exc: ReportRequestError):
    logger.warning(f"Rejected report request: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

@app.exception_handler(AggregationFailure)
async def aggregation_failure_handler(request: Request, exc: AggregationFailure):
    logger.error(f"Report aggregation failed: {exc.message}", exc_info=exc.__cause__)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "Internal server error", "details": exc.message}
    )

# Router Registration
app.include_router(reports.router)

# Health Check
@app.get("/health")
async def health_check():
    return {"status": "ok", "environment": settings.ENVIRONMENT}

if __name__ == "__main__":
    uvicorn.run("koperasi_reports.main:app", host="0.0.0.0", port=8000, reload=True)
