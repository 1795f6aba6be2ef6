"""
Project Canvas Backend - Canvas Service (read path)
====================================================

What:  Builds the canonical payload {canvas, settings, hotspots} from the store.
How:   Reads the two singleton rows and the ordered hotspot rows, substitutes
       defaults for anything missing and serializes through CanvasPayload.
Who:   GET /api/canvas (public mode), GET /api/admin/export and
       `sync-data --export` (export mode).

Modes:
    public   enabled rows only; the `enabled` key is never emitted
    export   every row; `enabled: false` emitted for disabled rows only,
             true is the implicit default and is omitted

Ordering:
    sequence ascending, ties broken by id so repeated exports are identical.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from canvas_journal.exceptions import DatabaseError
from canvas_journal.models import SINGLETON_ID, CanvasConfig, Hotspot, ZoomSettings
from canvas_journal.schemas import (
    CanvasOut,
    CanvasPayload,
    ContentOut,
    HotspotOut,
    Region,
    ZoomSettingsOut,
)

logger = logging.getLogger(__name__)

# ── Defaults used when the singleton rows are absent ─────────────────────
DEFAULT_CANVAS_WIDTH = 1376
DEFAULT_CANVAS_HEIGHT = 768
DEFAULT_ZOOM_ON_CLICK = 1.5
DEFAULT_MIN_ZOOM = 0.5
DEFAULT_MAX_ZOOM = 3


def _num(value):
    """Collapse integral floats (as returned by REAL columns) to int."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _coalesce(value, default):
    return default if value is None else _num(value)


def serialize_canvas(row: Optional[CanvasConfig]) -> CanvasOut:
    if row is None:
        return CanvasOut(width=DEFAULT_CANVAS_WIDTH, height=DEFAULT_CANVAS_HEIGHT)
    return CanvasOut(width=row.width, height=row.height)


def serialize_settings(row: Optional[ZoomSettings]) -> ZoomSettingsOut:
    """Each column falls back to its own default independently."""
    return ZoomSettingsOut(
        zoom_on_click=_coalesce(row.zoom_on_click if row else None, DEFAULT_ZOOM_ON_CLICK),
        min_zoom=_coalesce(row.min_zoom if row else None, DEFAULT_MIN_ZOOM),
        max_zoom=_coalesce(row.max_zoom if row else None, DEFAULT_MAX_ZOOM),
    )


def serialize_hotspot(row: Hotspot, export: bool = False) -> HotspotOut:
    return HotspotOut(
        id=row.id,
        name=row.name,
        enabled=False if (export and not row.enabled) else None,
        type=row.type or "text",
        region=Region(
            x=_num(row.x),
            y=_num(row.y),
            width=_num(row.width),
            height=_num(row.height),
        ),
        content=ContentOut(
            title=row.title or "",
            description=row.description or "",
            image=row.image or "",
            video=row.video or "",
        ),
        sequence=row.sequence,
    )


class CanvasService:
    """Stateless read service for the rendering and export payloads."""

    async def build_payload(self, db: AsyncSession, export: bool = False) -> CanvasPayload:
        """
        Read the full payload.

        Args:
            db:      Async database session
            export:  False for the public view (enabled rows only),
                     True for the admin/sync export (all rows)

        Raises:
            DatabaseError: Any query failed (→ 500)
        """
        try:
            canvas_row = await db.get(CanvasConfig, SINGLETON_ID)
            settings_row = await db.get(ZoomSettings, SINGLETON_ID)

            query = select(Hotspot).order_by(Hotspot.sequence, Hotspot.id)
            if not export:
                query = query.where(Hotspot.enabled.is_(True))
            result = await db.execute(query)
            rows = list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error("Database error reading canvas payload: %s", str(e), exc_info=True)
            raise DatabaseError(
                context={"operation": "export" if export else "read", "error_type": type(e).__name__},
            )

        return CanvasPayload(
            canvas=serialize_canvas(canvas_row),
            settings=serialize_settings(settings_row),
            hotspots=[serialize_hotspot(row, export=export) for row in rows],
        )

    async def export_payload(self, db: AsyncSession) -> CanvasPayload:
        """Full store dump: every hotspot, disabled ones flagged."""
        return await self.build_payload(db, export=True)


canvas_service = CanvasService()
