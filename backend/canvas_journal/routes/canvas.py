"""
Project Canvas Backend - Public Canvas Route
=============================================

What:  GET /api/canvas, the payload the client renders.
How:   Delegates to CanvasService in public mode: enabled hotspots only,
       ordered by sequence, no `enabled` key in the output.
Who:   The browser client; rate limited per IP by RateLimitMiddleware.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from canvas_journal.database import get_db_session
from canvas_journal.schemas import CanvasPayload, ErrorResponse
from canvas_journal.services.canvas_service import canvas_service

router = APIRouter(prefix="/api", tags=["Canvas"])


@router.get(
    "/canvas",
    response_model=CanvasPayload,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    summary="Canvas, zoom settings and enabled hotspots",
    responses={
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Database error"},
    },
)
async def get_canvas(db: AsyncSession = Depends(get_db_session)) -> CanvasPayload:
    return await canvas_service.build_payload(db)
