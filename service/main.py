"""
LeadView FastAPI Service

Serves the lead analysis modal.

Endpoints:
    GET  /health                     - Liveness probe
    GET  /leads                      - Stored leads
    POST /leads                      - Insert or replace a stored lead row
    GET  /leads/{id}/analysis        - Analysis modal (HTML page)
    GET  /leads/{id}/analysis/json   - Analysis modal with build metadata
    GET  /layouts                    - Layouts and missing fragments
    GET  /fragments                  - Registered fragment names
    GET  /tiers/{score}              - Tier descriptor for a score
"""

import importlib
import json
import logging
import os
import time
import uuid
from datetime import datetime, timezone
from typing import Dict, List

from fastapi import FastAPI, Request
from pydantic import BaseModel

import leadview
from leadview import FragmentRegistry, LayoutStore, ModalBuilder, ModalBuiltEvent, library
from leadview import extensions

from service import demo_leads
from service.routers import modal
from service.store import LeadStore

# =============================================================================
# Configuration
# =============================================================================

LV_LOG_LEVEL = os.getenv("LV_LOG_LEVEL", "INFO")
LV_LAYOUTS_PATH = os.getenv("LV_LAYOUTS_PATH") or None
LV_EXTENSION_MODULES = [
    name.strip() for name in os.getenv("LV_EXTENSION_MODULES", "").split(",") if name.strip()
]
LV_DOCS_ENABLED = os.getenv("LV_DOCS_ENABLED", "true").lower() == "true"
LV_SEED_DEMO_LEADS = os.getenv("LV_SEED_DEMO_LEADS", "true").lower() == "true"
LV_HIGH_TIER_THRESHOLD = float(os.getenv("LV_HIGH_TIER_THRESHOLD", "90"))

# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

_EXTRA_FIELDS = ("request_id", "lead_id", "analysis_type", "duration_ms", "status_code")


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging(level: str = LV_LOG_LEVEL) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    for name in ("leadview", "service"):
        named = logging.getLogger(name)
        named.setLevel(getattr(logging, level.upper(), logging.INFO))
        if not any(isinstance(h.formatter, JSONFormatter) for h in named.handlers):
            named.addHandler(handler)


configure_logging()
logger = logging.getLogger("service")

# =============================================================================
# Modal Builder
# =============================================================================

def load_extension_modules(names: List[str]) -> List[str]:
    """Import extension modules so their @extension callbacks are queued."""
    loaded = []
    for name in names:
        importlib.import_module(name)
        loaded.append(name)
        logger.info(f"Loaded fragment extension module: {name}")
    return loaded


def log_modal_built(event: ModalBuiltEvent) -> None:
    logger.info(
        f"modal:built @{event.lead_handle}",
        extra={"analysis_type": event.analysis_type},
    )


def create_builder() -> ModalBuilder:
    """Registry (core + queued extensions) and layouts, wired into a builder."""
    library.queue_extensions(extensions.extension_queue)
    load_extension_modules(LV_EXTENSION_MODULES)
    registry = FragmentRegistry(
        installers=[library.install_core],
        extensions=extensions.extension_queue,
    )
    layouts = LayoutStore.from_yaml(LV_LAYOUTS_PATH)
    builder = ModalBuilder(
        registry,
        layouts,
        observers=[log_modal_built],
        high_tier_threshold=LV_HIGH_TIER_THRESHOLD,
    )
    for analysis_type in layouts.analysis_types():
        builder.validate_layout(analysis_type)
    return builder


modal_builder = create_builder()
lead_store = LeadStore()
if LV_SEED_DEMO_LEADS:
    demo_leads.seed(lead_store)

modal.set_builder(modal_builder)
modal.set_store(lead_store)

# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="LeadView",
    description="Lead analysis modal service",
    version=leadview.__version__,
    docs_url="/docs" if LV_DOCS_ENABLED else None,
    redoc_url="/redoc" if LV_DOCS_ENABLED else None,
    openapi_url="/openapi.json" if LV_DOCS_ENABLED else None,
)

app.include_router(modal.router)

# =============================================================================
# Request/Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str
    timestamp: str
    version: str
    checks: Dict[str, bool]

# =============================================================================
# Middleware
# =============================================================================

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests and log the request duration."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id
    start = time.time()

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    logger.info(
        f"{request.method} {request.url.path}",
        extra={
            "request_id": request_id,
            "status_code": response.status_code,
            "duration_ms": round((time.time() - start) * 1000, 2),
        },
    )
    return response

# =============================================================================
# Health Endpoints
# =============================================================================

@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Liveness probe - checks if process is alive and the builder is wired."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=leadview.__version__,
        checks={
            "layouts_loaded": len(modal_builder.layouts) > 0,
            "fragments_registered": len(modal_builder.registry) > 0,
            "extensions_drained": extensions.extension_queue.drained,
        },
    )

# =============================================================================
# Startup/Shutdown
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Log startup info."""
    logger.info("LeadView starting", extra={"request_id": "startup"})
    logger.info(f"Layouts: {', '.join(modal_builder.layouts.analysis_types())}")
    logger.info(f"Fragments registered: {len(modal_builder.registry)}")
    logger.info(f"Leads loaded: {len(lead_store)}")
    logger.info(f"Docs enabled: {LV_DOCS_ENABLED}")


@app.on_event("shutdown")
async def shutdown_event():
    """Log shutdown."""
    logger.info("LeadView shutting down")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
