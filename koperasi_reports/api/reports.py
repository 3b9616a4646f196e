import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from koperasi_reports.config import settings
from koperasi_reports.database import get_ledger_store
from koperasi_reports.models.report import ReportEnvelope
from koperasi_reports.reporting.aggregator import LedgerAggregator, LedgerStore, parse_date, parse_report_type

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["Reports"])

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}

@router.options("/financial", status_code=204)
async def preflight_financial_report():
    return Response(status_code=204, headers=PREFLIGHT_HEADERS)

@router.get("/financial", response_model=ReportEnvelope)
async def get_financial_report(
    report_type: Optional[str] = Query(None, alias="type", description="trial_balance, balance_sheet, income_statement or cash_flow"),
    start_date: Optional[str] = Query(None, description="ISO date, inclusive"),
    end_date: Optional[str] = Query(None, description="ISO date, inclusive"),
    store: LedgerStore = Depends(get_ledger_store)
):
    """Generate one of the four financial statements for a period."""
    logger.info("Financial reports request started")

    # Reject bad parameters before touching the ledger
    parsed_type = parse_report_type(report_type)
    start = parse_date(start_date, "start_date", settings.DEFAULT_START_DATE)
    end = parse_date(end_date, "end_date", settings.DEFAULT_END_DATE)

    aggregator = LedgerAggregator(store, settings.CASH_ACCOUNT_CODE, settings.OPERATING_REFERENCE_TAGS)
    report = await aggregator.generate(parsed_type, start, end)
    return ReportEnvelope(data=report)
