"""
Project Canvas Backend - Hotspot Service (write path)
======================================================

What:  Create/update/delete of single hotspots, bulk replace, and the
       singleton upserts shared with the sync utility.
How:   ORM get-then-assign upserts that behave the same on PostgreSQL and
       SQLite. Service methods own their transaction: commit on success,
       rollback + DatabaseError on any SQLAlchemyError.
Who:   Admin routes; the row helpers are also used by SyncService.

Write semantics:
    upsert        insert-or-update by id after the presence check;
                  enabled defaults to True, type to 'text', content strings to ''
    update        column-level coalesce: omitted fields keep stored values
    delete        NotFoundError when no row matches
    bulk replace  canvas/settings upserted when given; hotspots given (even
                  empty) → delete all, insert verbatim; one transaction
"""

import logging
from typing import Iterable, List

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from canvas_journal.exceptions import DatabaseError, NotFoundError, ValidationError
from canvas_journal.models import SINGLETON_ID, CanvasConfig, Hotspot, ZoomSettings
from canvas_journal.schemas import (
    BulkRequest,
    CanvasIn,
    HotspotIn,
    HotspotPatch,
    ZoomSettingsIn,
)

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Row helpers (no commit; callers own the transaction)
# ══════════════════════════════════════════════════════════════════════════


async def upsert_canvas(db: AsyncSession, canvas: CanvasIn) -> CanvasConfig:
    row = await db.get(CanvasConfig, SINGLETON_ID)
    if row is None:
        row = CanvasConfig(id=SINGLETON_ID, width=canvas.width, height=canvas.height)
        db.add(row)
    else:
        row.width = canvas.width
        row.height = canvas.height
    return row


async def upsert_settings(db: AsyncSession, zoom: ZoomSettingsIn) -> ZoomSettings:
    row = await db.get(ZoomSettings, SINGLETON_ID)
    if row is None:
        row = ZoomSettings(id=SINGLETON_ID)
        db.add(row)
    row.zoom_on_click = zoom.zoom_on_click
    row.min_zoom = zoom.min_zoom
    row.max_zoom = zoom.max_zoom
    return row


def build_hotspot_row(data: HotspotIn) -> Hotspot:
    """
    Map an input hotspot onto a new ORM row without validating presence.

    Missing region or content leave NOT NULL columns as NULL, so the
    database rejects the row at flush time.
    """
    row = Hotspot(id=data.id)
    assign_hotspot(row, data)
    return row


def assign_hotspot(row: Hotspot, data: HotspotIn) -> None:
    """Overwrite every column of `row` from a full hotspot input."""
    region = data.region
    content = data.content

    row.name = data.name
    row.enabled = data.enabled is not False
    row.type = data.type or "text"
    row.x = region.x if region else None
    row.y = region.y if region else None
    row.width = region.width if region else None
    row.height = region.height if region else None
    row.title = (content.title or "") if content else None
    row.description = (content.description or "") if content else None
    row.image = (content.image or "") if content else None
    row.video = (content.video or "") if content else None
    row.sequence = data.sequence


async def upsert_hotspot_row(db: AsyncSession, data: HotspotIn) -> Hotspot:
    row = await db.get(Hotspot, data.id)
    if row is None:
        row = build_hotspot_row(data)
        db.add(row)
    else:
        assign_hotspot(row, data)
    return row


async def delete_all_hotspots(db: AsyncSession) -> None:
    """Delete every hotspot row and detach any loaded Hotspot instances."""
    await db.execute(delete(Hotspot), execution_options={"synchronize_session": False})
    for obj in list(db.sync_session.identity_map.values()):
        if isinstance(obj, Hotspot):
            db.expunge(obj)


def insert_hotspot_rows(db: AsyncSession, hotspots: Iterable[HotspotIn]) -> List[Hotspot]:
    rows = [build_hotspot_row(h) for h in hotspots]
    db.add_all(rows)
    return rows


# ══════════════════════════════════════════════════════════════════════════
# Service
# ══════════════════════════════════════════════════════════════════════════


class HotspotService:
    """
    Admin write operations.

    Error Handling Strategy:
        Presence failures raise ValidationError before touching the database.
        Unknown ids raise NotFoundError. Anything the database rejects is
        rolled back, logged with the original error and re-raised as a
        generic DatabaseError.
    """

    async def upsert_hotspot(self, db: AsyncSession, data: HotspotIn) -> Hotspot:
        """
        Insert or update one hotspot by id.

        Raises:
            ValidationError: id, name, region, content or sequence missing (→ 400)
            DatabaseError: write failed (→ 500)
        """
        missing = data.missing_fields()
        if missing:
            raise ValidationError(context={"missing": missing})

        try:
            row = await upsert_hotspot_row(db, data)
            await db.commit()
        except SQLAlchemyError as e:
            raise await self._rollback(db, "upserting hotspot", e, hotspot_id=data.id) from e

        logger.info("Hotspot %s upserted (sequence=%s)", data.id, data.sequence)
        return row

    async def update_hotspot(
        self, db: AsyncSession, hotspot_id: str, patch: HotspotPatch
    ) -> Hotspot:
        """
        Partial update; each omitted field keeps its current stored value.

        Raises:
            NotFoundError: no hotspot with this id (→ 404)
            DatabaseError: write failed (→ 500)
        """
        try:
            row = await db.get(Hotspot, hotspot_id)
            if row is None:
                raise NotFoundError(resource="hotspot", resource_id=hotspot_id)

            for field in ("name", "enabled", "type", "sequence"):
                value = getattr(patch, field)
                if value is not None:
                    setattr(row, field, value)

            if patch.region is not None:
                for field in ("x", "y", "width", "height"):
                    value = getattr(patch.region, field)
                    if value is not None:
                        setattr(row, field, value)

            if patch.content is not None:
                for field in ("title", "description", "image", "video"):
                    value = getattr(patch.content, field)
                    if value is not None:
                        setattr(row, field, value)

            await db.commit()
        except SQLAlchemyError as e:
            raise await self._rollback(db, "updating hotspot", e, hotspot_id=hotspot_id) from e

        logger.info("Hotspot %s updated", hotspot_id)
        return row

    async def delete_hotspot(self, db: AsyncSession, hotspot_id: str) -> None:
        """
        Raises:
            NotFoundError: no hotspot with this id (→ 404)
            DatabaseError: delete failed (→ 500)
        """
        try:
            row = await db.get(Hotspot, hotspot_id)
            if row is None:
                raise NotFoundError(resource="hotspot", resource_id=hotspot_id)
            await db.delete(row)
            await db.commit()
        except SQLAlchemyError as e:
            raise await self._rollback(db, "deleting hotspot", e, hotspot_id=hotspot_id) from e

        logger.info("Hotspot %s deleted", hotspot_id)

    async def bulk_replace(self, db: AsyncSession, request: BulkRequest) -> None:
        """
        Replace canvas, settings and/or the whole hotspot set in one transaction.

        Rows are inserted verbatim; only database constraints (NOT NULL,
        primary key uniqueness) reject them. Any failure rolls back every
        statement of the request, so a partial bulk write is never visible.
        """
        try:
            if request.canvas is not None:
                await upsert_canvas(db, request.canvas)
            if request.settings is not None:
                await upsert_settings(db, request.settings)
            if request.hotspots is not None:
                await delete_all_hotspots(db)
                insert_hotspot_rows(db, request.hotspots)
            await db.commit()
        except SQLAlchemyError as e:
            raise await self._rollback(db, "bulk replace", e) from e

        logger.info(
            "Bulk replace committed: canvas=%s settings=%s hotspots=%s",
            request.canvas is not None,
            request.settings is not None,
            len(request.hotspots) if request.hotspots is not None else "unchanged",
        )

    @staticmethod
    async def _rollback(
        db: AsyncSession, operation: str, error: Exception, **context
    ) -> DatabaseError:
        """Roll back the session and build the error to raise."""
        await db.rollback()
        logger.error("Database error %s: %s", operation, str(error), exc_info=True)
        return DatabaseError(
            context={"operation": operation, "error_type": type(error).__name__, **context},
        )


hotspot_service = HotspotService()
