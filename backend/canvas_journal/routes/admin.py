"""
Project Canvas Backend - Admin Routes
======================================

What:  Authenticated write API and full export.
How:   Every route depends on require_admin_token (attached at router level,
       so it runs before body parsing). Handlers stay thin and delegate to
       HotspotService / CanvasService.
Who:   Editors and deployment tooling holding ADMIN_TOKEN.

Endpoints:
    POST   /api/admin/hotspots        upsert one hotspot          → {"ok": true}
    PUT    /api/admin/hotspots/{id}   partial update              → {"ok": true}
    DELETE /api/admin/hotspots/{id}   delete                      → {"ok": true}
    POST   /api/admin/bulk            replace canvas/settings/set → {"ok": true}
    GET    /api/admin/export          every hotspot, export mode  → payload
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from canvas_journal.database import get_db_session
from canvas_journal.schemas import (
    BulkRequest,
    CanvasPayload,
    ErrorResponse,
    HotspotIn,
    HotspotPatch,
    OkResponse,
)
from canvas_journal.security import require_admin_token
from canvas_journal.services.canvas_service import canvas_service
from canvas_journal.services.hotspot_service import hotspot_service

logger = logging.getLogger(__name__)

AUTH_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing or malformed bearer header"},
    403: {"model": ErrorResponse, "description": "Invalid token"},
}

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin_token)],
    responses=AUTH_RESPONSES,
)


@router.post(
    "/hotspots",
    response_model=OkResponse,
    summary="Create or replace a hotspot by id",
    responses={400: {"model": ErrorResponse, "description": "Missing required fields"}},
)
async def upsert_hotspot(
    body: HotspotIn,
    db: AsyncSession = Depends(get_db_session),
) -> OkResponse:
    await hotspot_service.upsert_hotspot(db, body)
    return OkResponse()


@router.put(
    "/hotspots/{hotspot_id}",
    response_model=OkResponse,
    summary="Partially update a hotspot",
    responses={404: {"model": ErrorResponse, "description": "Hotspot not found"}},
)
async def update_hotspot(
    hotspot_id: str,
    body: HotspotPatch,
    db: AsyncSession = Depends(get_db_session),
) -> OkResponse:
    await hotspot_service.update_hotspot(db, hotspot_id, body)
    return OkResponse()


@router.delete(
    "/hotspots/{hotspot_id}",
    response_model=OkResponse,
    summary="Delete a hotspot",
    responses={404: {"model": ErrorResponse, "description": "Hotspot not found"}},
)
async def delete_hotspot(
    hotspot_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> OkResponse:
    await hotspot_service.delete_hotspot(db, hotspot_id)
    return OkResponse()


@router.post(
    "/bulk",
    response_model=OkResponse,
    summary="Replace canvas, settings and/or the whole hotspot set",
)
async def bulk_replace(
    body: BulkRequest,
    db: AsyncSession = Depends(get_db_session),
) -> OkResponse:
    await hotspot_service.bulk_replace(db, body)
    return OkResponse()


@router.get(
    "/export",
    response_model=CanvasPayload,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    summary="Export every hotspot, disabled ones flagged",
)
async def export(db: AsyncSession = Depends(get_db_session)) -> CanvasPayload:
    return await canvas_service.export_payload(db)
