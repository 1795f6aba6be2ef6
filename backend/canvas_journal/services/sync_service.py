"""
Project Canvas Backend - Sync Service (bulk import / export)
============================================================

What:  Loads a payload document into the store, or dumps the store back to
       a payload document.
How:   Import reuses the hotspot row helpers inside a single transaction;
       export delegates to CanvasService in export mode.
Who:   `sync-data` and `seed` commands.

Import rules:
    canvas / settings   upserted when present
    hotspots            optional; with replace=True every existing row is
                        deleted first, otherwise rows not in the document
                        are left untouched
    invalid entries     missing id/name/region/content/sequence, or a
                        region/content that does not parse: skipped with a
                        warning, the rest of the document is still committed
    database errors     roll back the whole import
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from canvas_journal.exceptions import DatabaseError, ValidationError
from canvas_journal.schemas import CanvasIn, HotspotIn, ZoomSettingsIn
from canvas_journal.services.canvas_service import canvas_service
from canvas_journal.services.hotspot_service import (
    delete_all_hotspots,
    upsert_canvas,
    upsert_hotspot_row,
    upsert_settings,
)

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """Outcome of one import."""
    canvas: bool = False
    settings: bool = False
    replaced: bool = False
    synced: int = 0
    skipped: List[str] = field(default_factory=list)

    def summary(self) -> str:
        mode = " (replace mode)" if self.replaced else ""
        text = f"Synced {self.synced} hotspots{mode}"
        if self.skipped:
            text += f", skipped {len(self.skipped)} invalid"
        return text


def parse_hotspot_entry(raw: Any) -> Optional[HotspotIn]:
    """
    Validate one raw hotspot entry from an import document.

    Returns None (after logging a warning) when the entry has to be skipped.
    """
    preview = json.dumps(raw, ensure_ascii=False, default=str)[:80]
    if not isinstance(raw, dict):
        logger.warning("Skipping invalid hotspot: %s", preview)
        return None
    try:
        hotspot = HotspotIn.model_validate(raw)
    except PydanticValidationError as e:
        logger.warning("Skipping invalid hotspot: %s (%d field errors)", preview, e.error_count())
        return None
    missing = hotspot.missing_fields()
    if missing:
        logger.warning("Skipping invalid hotspot: %s (missing %s)", preview, ", ".join(missing))
        return None
    return hotspot


class SyncService:
    """Document-level import/export used by the one-shot utilities."""

    async def import_document(
        self, db: AsyncSession, document: Any, replace: bool = False
    ) -> SyncReport:
        """
        Upsert a payload document in one transaction.

        Raises:
            ValidationError: the document is not an object, or canvas/settings
                do not match the payload shape (nothing is written)
            DatabaseError: the database rejected a statement (rolled back)
        """
        if not isinstance(document, dict):
            raise ValidationError(message="Import document must be a JSON object")

        try:
            canvas = CanvasIn.model_validate(document["canvas"]) if document.get("canvas") else None
            zoom = (
                ZoomSettingsIn.model_validate(document["settings"])
                if document.get("settings")
                else None
            )
        except PydanticValidationError as e:
            raise ValidationError(
                message="Invalid canvas or settings section",
                context={"errors": e.error_count()},
            ) from e

        hotspots = document.get("hotspots")
        if hotspots is not None and not isinstance(hotspots, list):
            raise ValidationError(
                message="hotspots must be a list",
                context={"type": type(hotspots).__name__},
            )

        report = SyncReport(canvas=canvas is not None, settings=zoom is not None)

        try:
            if canvas is not None:
                await upsert_canvas(db, canvas)
            if zoom is not None:
                await upsert_settings(db, zoom)

            if hotspots is not None:
                if replace:
                    await delete_all_hotspots(db)
                    report.replaced = True
                for raw in hotspots:
                    hotspot = parse_hotspot_entry(raw)
                    if hotspot is None:
                        report.skipped.append(str(raw.get("id", "?")) if isinstance(raw, dict) else "?")
                        continue
                    await upsert_hotspot_row(db, hotspot)
                    report.synced += 1

            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Sync failed, transaction rolled back: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Sync failed; no changes were committed.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info(report.summary())
        return report

    async def export_document(self, db: AsyncSession) -> dict:
        """The full store as a payload document (export mode)."""
        payload = await canvas_service.export_payload(db)
        return payload.to_document()


sync_service = SyncService()
