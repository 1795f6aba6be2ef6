"""
Project Canvas Backend - SQLAlchemy Models
===========================================

What:  ORM models for the three persisted entities: canvas configuration,
       zoom settings and hotspots.
How:   Inherit from the shared DeclarativeBase; Alembic and create_schema()
       read their metadata.
Who:   Used by the canvas, hotspot and sync services.

Table Design:
    canvas_config / settings
        Singleton tables. The row always has id = 1 and is maintained by
        upsert, so repeated seeding is idempotent. Rows are never deleted.

    hotspots
        Multi-row table keyed by a user-assigned string id. Region and
        content are flattened into columns. `type` and `video` were added
        after the first release; their server defaults keep older rows valid
        without a backfill (see canvas_journal.schema).

    Index on sequence:
        Both read paths order by sequence for next/previous navigation.
"""

from sqlalchemy import Boolean, Float, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from canvas_journal.database import Base

# Fixed primary key of the singleton rows
SINGLETON_ID = 1


class CanvasConfig(Base):
    """Native pixel dimensions of the background image (singleton, id = 1)."""

    __tablename__ = "canvas_config"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    width: Mapped[int] = mapped_column(Integer, nullable=False)
    height: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<CanvasConfig(width={self.width}, height={self.height})>"


class ZoomSettings(Base):
    """
    Pan-zoom bounds and the zoom level used when a hotspot is activated.

    Mapped to the `settings` table (singleton, id = 1).
    """

    __tablename__ = "settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    zoom_on_click: Mapped[float | None] = mapped_column(Float, nullable=True)
    min_zoom: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_zoom: Mapped[float | None] = mapped_column(Float, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<ZoomSettings(zoom_on_click={self.zoom_on_click}, "
            f"min_zoom={self.min_zoom}, max_zoom={self.max_zoom})>"
        )


class Hotspot(Base):
    """
    A clickable rectangular region over the background image.

    Lifecycle:
        1. Created by POST /api/admin/hotspots (upsert), bulk replace, seed or sync
        2. Updated by PUT /api/admin/hotspots/{id} (column-level coalesce)
        3. Deleted by DELETE /api/admin/hotspots/{id} or dropped by a bulk replace

    Region coordinates live in the canvas pixel space and are not checked
    against CanvasConfig bounds; overlapping regions are allowed.
    """

    __tablename__ = "hotspots"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("TRUE"),
    )
    type: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="text",
        server_default=text("'text'"),
        comment="Modal presentation: text, image, video",
    )

    # ── Region (canvas pixel rectangle) ──────────────────────────────────
    x: Mapped[float] = mapped_column(Float, nullable=False)
    y: Mapped[float] = mapped_column(Float, nullable=False)
    width: Mapped[float] = mapped_column(Float, nullable=False)
    height: Mapped[float] = mapped_column(Float, nullable=False)

    # ── Content ───────────────────────────────────────────────────────────
    title: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        server_default=text("''"),
        comment="Markdown, rendered by the client for text hotspots",
    )
    image: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    video: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))

    sequence: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        Index("idx_hotspots_sequence", "sequence"),
    )

    def __repr__(self) -> str:
        return (
            f"<Hotspot(id='{self.id}', type='{self.type}', "
            f"sequence={self.sequence}, enabled={self.enabled})>"
        )
