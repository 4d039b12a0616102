# stockdesk/routes/reports.py
from datetime import date
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from stockdesk.config import settings
from stockdesk.repositories import Store, get_store
from stockdesk.schemas.reports import DashboardResponse, ReportResponse
from stockdesk.services import reports

router = APIRouter(prefix="/reports", tags=["Reports"])


def _parse_iso(s: Optional[str]) -> Optional[date]:
    if not s:
        return None
    try:
        return date.fromisoformat(s)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Bad date format: {s}")


# Missing bounds fall back to the default three-month window
def _window(start_date: Optional[str], end_date: Optional[str]) -> Tuple[date, date]:
    default_start, default_end = reports.default_window()
    start = _parse_iso(start_date) or default_start
    end = _parse_iso(end_date) or default_end
    if start > end:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")
    return start, end


# -----------------------------
# 1) Dashboard
# -----------------------------
@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(store: Store = Depends(get_store)):
    snapshot = await reports.load_snapshot(store)
    return reports.dashboard(snapshot, horizon_days=settings.EXPIRING_HORIZON_DAYS)


# -----------------------------
# 2) Reports & analytics
# -----------------------------
@router.get("/summary", response_model=ReportResponse)
async def get_report(
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD, inclusive"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD, inclusive"),
    top: int = Query(settings.TOP_PRODUCTS_LIMIT, ge=1, le=100),
    store: Store = Depends(get_store),
):
    start, end = _window(start_date, end_date)
    snapshot = await reports.load_snapshot(store)
    return reports.build_report(snapshot, start, end, top_n=top)


# -----------------------------
# 3) Export as a downloadable JSON document
# -----------------------------
@router.get("/export")
async def export_report(
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    store: Store = Depends(get_store),
):
    start, end = _window(start_date, end_date)
    snapshot = await reports.load_snapshot(store)
    report = reports.build_report(snapshot, start, end, top_n=settings.TOP_PRODUCTS_LIMIT)
    filename, document = reports.export_report(report)
    return Response(
        content=document,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
