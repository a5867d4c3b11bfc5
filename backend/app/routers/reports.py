"""Reports router (admin).

Endpoints:
    GET  /api/admin/reports/generate          Composite operations report
    GET  /api/admin/reports/dashboard-stats   Headline counts for the dashboard
"""

import logging

from fastapi import APIRouter, Depends

from app.auth.deps import require_permission
from app.database import DocumentStore, get_store
from app.models.user import User
from app.schemas.report import DashboardStats, Report, ReportResponse
from app.services.reports import dashboard_stats, generate_report

logger = logging.getLogger("tms.reports")

router = APIRouter()


@router.get("/generate", response_model=ReportResponse)
def generate(
    store: DocumentStore = Depends(get_store),
    user: User = Depends(require_permission("reports.read")),
):
    report = generate_report(
        shipments=store.find_all("shipments"),
        containers=store.find_all("containers"),
        fleet=store.find_all("fleet"),
        trips=store.find_all("fleet_trips"),
        inventory=store.find_all("inventory"),
        expenses=store.find_all("expenses"),
    )
    logger.info("Report generated for %s", user.username)
    return ReportResponse(report=Report.model_validate(report))


@router.get("/dashboard-stats", response_model=DashboardStats)
def dashboard(
    store: DocumentStore = Depends(get_store),
    _: User = Depends(require_permission("reports.read")),
):
    return dashboard_stats(
        shipments=store.find_all("shipments"),
        containers=store.find_all("containers"),
        fleet=store.find_all("fleet"),
        inventory=store.find_all("inventory"),
    )
