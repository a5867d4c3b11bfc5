import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import store
from app.middleware.exceptions import register_exception_handlers
from app.middleware.security import RequestLoggingMiddleware, SecurityHeadersMiddleware
from app.routers import auth, containers, financial, fleet, health, inventory, reports, shipments

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
)
logger = logging.getLogger("tms")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the data file on startup so a broken file fails fast."""
    store.load()
    logger.info("Transport Management System started (%s)", settings.environment)
    yield
    logger.info("Transport Management System stopped")


app = FastAPI(
    title="Transport Management System",
    description="Blueberry export shipments, containers, fleet and financials",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware (outermost last) ──────────────────────────────
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    RequestLoggingMiddleware,
    exempt_paths=["/health", "/health/ready"],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
# Public / customer
app.include_router(health.router)
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(shipments.router, prefix="/api/shipments", tags=["shipments"])

# Admin
app.include_router(containers.router, prefix="/api/admin/containers", tags=["containers"])
app.include_router(fleet.router, prefix="/api/admin/fleet", tags=["fleet"])
app.include_router(inventory.router, prefix="/api/admin/inventory", tags=["inventory"])
app.include_router(financial.router, prefix="/api/admin/financial", tags=["financial"])
app.include_router(reports.router, prefix="/api/admin/reports", tags=["reports"])
