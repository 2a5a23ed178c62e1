"""Analysis modal router: endpoints only.

Pipeline: store lookup → payload resolution → layout → fragments → markup.
The router holds no composition logic; it wires the lead store to the
modal builder set up by ``main.py``.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ConfigDict, Field

from leadview import LeadNotFoundError, LeadViewError, classify_score, clamp_score

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis Modal"])

# Templates directory: service/templates/
_templates_dir = Path(__file__).parent.parent / "templates"
_jinja = Jinja2Templates(directory=str(_templates_dir))

# Module-level references set from main app
_builder = None
_store = None


def set_builder(builder):
    """Set the modal builder from main app."""
    global _builder
    _builder = builder


def set_store(store):
    """Set the lead store from main app."""
    global _store
    _store = store


def _require():
    if _builder is None or _store is None:
        raise HTTPException(status_code=500, detail="Modal builder not initialized")
    return _builder, _store


class LeadRow(BaseModel):
    """Stored lead row with its runs (store column names)."""
    lead_id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    runs: list[Dict[str, Any]] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


def _error_page(request: Request, lead_id: str, error: LeadViewError, status_code: int):
    return _jinja.TemplateResponse(
        request,
        "error.html",
        {
            "lead_id": lead_id,
            "code": error.code,
            "message": error.message,
            "request_id": getattr(request.state, "request_id", None),
        },
        status_code=status_code,
    )


# ── Leads ────────────────────────────────────────────────────────────────────

@router.get("/leads")
async def list_leads():
    """List stored leads with their latest analysis type and score."""
    _, store = _require()
    return store.list_leads()


@router.post("/leads", status_code=201)
async def upsert_lead(row: LeadRow):
    """Insert or replace a stored lead row."""
    _, store = _require()
    lead_id = store.put(row.model_dump())
    return {"lead_id": lead_id}


# ── HTML ─────────────────────────────────────────────────────────────────────

@router.get("/leads/{lead_id}/analysis", response_class=HTMLResponse)
async def get_analysis_html(request: Request, lead_id: str):
    """Render the analysis modal for a lead as an HTML page."""
    builder, store = _require()
    try:
        lead, record = store.fetch_lead_with_latest_runs(lead_id)
    except LeadNotFoundError as e:
        return _error_page(request, lead_id, e, status_code=404)

    try:
        view = builder.compose(lead, record)
    except LeadViewError as e:
        logger.error(
            "Modal build failed for lead %s: %s", lead_id, e,
            extra={"lead_id": lead_id, "analysis_type": lead.analysis_type},
        )
        return _error_page(request, lead_id, e, status_code=500)

    return _jinja.TemplateResponse(
        request,
        "analysis.html",
        {"lead": lead, "view": view},
    )


# ── JSON ─────────────────────────────────────────────────────────────────────

@router.get("/leads/{lead_id}/analysis/json")
async def get_analysis_json(lead_id: str):
    """Build the analysis modal and return it with build metadata."""
    builder, store = _require()
    try:
        lead, record = store.fetch_lead_with_latest_runs(lead_id)
    except LeadNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.to_dict())

    try:
        view = builder.compose(lead, record)
    except LeadViewError as e:
        raise HTTPException(status_code=500, detail=e.to_dict())

    return {"lead_id": lead_id, **view.to_dict()}


# ── Configuration ────────────────────────────────────────────────────────────

@router.get("/layouts")
async def list_layouts():
    """Configured layouts with any fragments the registry is missing."""
    builder, _ = _require()
    return {
        analysis_type: {
            "layout": builder.layouts.get(analysis_type).model_dump(),
            "missing_fragments": builder.validate_layout(analysis_type),
        }
        for analysis_type in builder.layouts.analysis_types()
    }


@router.get("/fragments")
async def list_fragments():
    """Registered fragment names."""
    builder, _ = _require()
    return {"count": len(builder.registry), "fragments": builder.registry.names()}


@router.get("/tiers/{score}")
async def get_tier(score: float):
    """Tier descriptor for a score (clamped to 0-100)."""
    clamped = clamp_score(score)
    return {"score": clamped, **classify_score(clamped).to_dict()}
