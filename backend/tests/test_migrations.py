"""
Project Canvas Backend - Schema Migration Tests
================================================

What we test:
    ✅ migrate-add-type-video adds both columns to a first-release table
    ✅ Existing rows get type='text' and video='' without a backfill
    ✅ Re-running is a no-op
    ✅ Missing table is a failed result, not a crash
"""

import pytest
import pytest_asyncio
from sqlalchemy import inspect, text

from canvas_journal.cli.migrate import migrate_add_type_video
from canvas_journal.database import Base, engine

LEGACY_HOTSPOTS_DDL = """
CREATE TABLE hotspots (
    id VARCHAR(255) PRIMARY KEY,
    name TEXT NOT NULL,
    enabled BOOLEAN NOT NULL DEFAULT TRUE,
    x REAL NOT NULL,
    y REAL NOT NULL,
    width REAL NOT NULL,
    height REAL NOT NULL,
    title TEXT NOT NULL DEFAULT '',
    description TEXT NOT NULL DEFAULT '',
    image TEXT NOT NULL DEFAULT '',
    sequence INTEGER NOT NULL
)
"""


async def hotspot_columns():
    async with engine.connect() as conn:
        return await conn.run_sync(
            lambda sync_conn: [c["name"] for c in inspect(sync_conn).get_columns("hotspots")]
        )


@pytest_asyncio.fixture
async def legacy_schema(database):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.execute(text(LEGACY_HOTSPOTS_DDL))
        await conn.execute(text(
            "INSERT INTO hotspots (id, name, x, y, width, height, title, sequence) "
            "VALUES ('1', 'Old', 1, 2, 3, 4, 'Old title', 1)"
        ))
    yield


class TestAddTypeVideo:
    """Tests for the migrate-add-type-video command."""

    @pytest.mark.asyncio
    async def test_adds_missing_columns(self, legacy_schema):
        """A first-release table gains both columns."""
        result = await migrate_add_type_video()

        assert result.ok
        assert result.message == "Migration complete! Added: type, video"
        columns = await hotspot_columns()
        assert "type" in columns and "video" in columns

    @pytest.mark.asyncio
    async def test_existing_rows_get_defaults(self, legacy_schema):
        """Existing rows read type=text and an empty video."""
        await migrate_add_type_video()

        async with engine.connect() as conn:
            row = (await conn.execute(text("SELECT type, video, title FROM hotspots"))).one()

        assert tuple(row) == ("text", "", "Old title")

    @pytest.mark.asyncio
    async def test_second_run_is_noop(self, legacy_schema):
        """Running again reports that nothing was needed."""
        await migrate_add_type_video()

        result = await migrate_add_type_video()

        assert result.ok
        assert result.message == "Migration complete! No columns needed."

    @pytest.mark.asyncio
    async def test_current_schema_needs_nothing(self, database):
        """A table created from the models is already complete."""
        result = await migrate_add_type_video()

        assert result.message == "Migration complete! No columns needed."

    @pytest.mark.asyncio
    async def test_missing_table_fails(self, database):
        """Without a hotspots table the command fails cleanly."""
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        result = await migrate_add_type_video()

        assert not result.ok
        assert result.message.startswith("Migration failed")
