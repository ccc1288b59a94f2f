from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from morclean import __version__
from morclean.api.deps import jobs_dep, now_dep, settings_dep, templates_dep
from morclean.board import build_board
from morclean.checklists.resolver import active_templates, resolve
from morclean.checklists.templates import TemplateSet
from morclean.config import Settings
from morclean.core.normalize import JobRecord
from morclean.filters.rules import ServiceTag, parse_tag
from morclean.filters.window import parse_mode
from morclean.providers import ProviderError
from morclean.providers.sheet import fetch_sheet_events

# -------------------------
# FastAPI setup
# -------------------------
app = FastAPI(title="MOR Clean Checklist API", version=__version__)
LOGGER = logging.getLogger(__name__)

# Build the template set at import; an invalid MORCLEAN_TEMPLATES_FILE raises ValueError here.
TEMPLATES: TemplateSet = active_templates()

# CORS (open; the viewer is served from a different origin)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------
# Pydantic response models
# -------------------------
class SectionOut(BaseModel):
    label: str
    items: List[str]


class ChecklistOut(BaseModel):
    tag: str
    name: str
    sections: List[SectionOut]


class BoardItemOut(BaseModel):
    job: JobRecord
    tag: str
    checklist: ChecklistOut


class BoardResponse(BaseModel):
    items: List[BoardItemOut]
    total: int
    mode: str
    q: str


def _checklist_out(template) -> ChecklistOut:
    return ChecklistOut(**template.to_dict())


# -------------------------
# Routes
# -------------------------
@app.get("/", tags=["meta"])
async def root():
    return {"message": "MOR Clean checklist API is running"}


@app.get("/healthz", tags=["meta"])
async def healthz(settings: Settings = Depends(settings_dep)):
    return {
        "status": "ok",
        "jobs_source": "api" if settings.jobs_api_url else ("sheet" if settings.jobs_csv_url else "none"),
        "storage_configured": settings.storage_configured,
    }


@app.get("/api/jobs", tags=["data"])
def get_jobs(settings: Settings = Depends(settings_dep)) -> Any:
    """Sheet CSV as ``{"events": [...]}``; errors come back as a 500 with an ``error`` body."""
    if not settings.jobs_csv_url:
        return JSONResponse({"error": "JOBS_CSV_URL not set"}, status_code=500)
    try:
        events = fetch_sheet_events(settings.jobs_csv_url, timeout=settings.fetch_timeout)
    except ProviderError as e:
        LOGGER.error("api/jobs failed: %s", e)
        return JSONResponse({"error": str(e)}, status_code=500)
    return {"events": events}


@app.get("/api/board", response_model=BoardResponse, tags=["data"])
def get_board(
    mode: str = Query("all", description="today | week | all"),
    q: Optional[str] = Query(None, description="Substring match on client/address/title/notes"),
    jobs: list[JobRecord] = Depends(jobs_dep),
    templates: TemplateSet = Depends(templates_dep),
    now: datetime = Depends(now_dep),
):
    try:
        window = parse_mode(mode)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    entries = build_board(jobs, now=now, mode=window, search=q, templates=templates)
    items = [
        BoardItemOut(job=e.job, tag=e.tag.value, checklist=_checklist_out(e.checklist))
        for e in entries
    ]
    return BoardResponse(items=items, total=len(items), mode=window.value, q=q or "")


@app.get("/api/checklists", response_model=List[ChecklistOut], tags=["data"])
async def list_checklists(templates: TemplateSet = Depends(templates_dep)):
    return [_checklist_out(resolve(tag, templates)) for tag in ServiceTag]


@app.get("/api/checklists/{tag}", response_model=ChecklistOut, tags=["data"])
async def get_checklist(tag: str, templates: TemplateSet = Depends(templates_dep)):
    service_tag = parse_tag(tag)
    if service_tag is None:
        raise HTTPException(status_code=404, detail="Unknown service tag")
    return _checklist_out(resolve(service_tag, templates))
