"""Shootplan Checklist Web Application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from shootplan.checklists import DOMAINS
from shootplan.core.config import settings
from shootplan.core.database import create_db_and_tables
from shootplan.core.errors import (
    ChecklistError,
    ConflictError,
    NotFoundError,
    StateError,
    StoreError,
    ValidationError,
)
from shootplan.routes import checklists, masters

# Configure logging
log_dir = Path(settings.log_dir).expanduser()
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    StateError: 409,
    StoreError: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting Shootplan application")
    create_db_and_tables()
    yield
    logger.info("Shootplan application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Wedding photography checklists built from per-user master templates",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for external access
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(checklists.router)
app.include_router(masters.router)


@app.exception_handler(ChecklistError)
async def checklist_error_handler(request: Request, exc: ChecklistError):
    """Translate checklist errors into HTTP error responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse({"detail": str(exc)}, status_code=status_code)


@app.get("/")
async def root(request: Request):
    """Redirect root to the list of checklist domains."""
    rp = request.scope.get("root_path", "")
    return RedirectResponse(f"{rp}/domains")


@app.get("/domains")
async def list_domains():
    """List the available checklist domains."""
    return [
        {"name": domain.name, "label": domain.label, "state_field": domain.state_field}
        for domain in DOMAINS.values()
    ]


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
