from canvas_journal.schemas.canvas import (  # noqa: F401
    BulkRequest,
    CanvasIn,
    CanvasOut,
    CanvasPayload,
    ContentIn,
    ContentOut,
    ErrorResponse,
    HealthResponse,
    HotspotIn,
    HotspotOut,
    HotspotPatch,
    OkResponse,
    Region,
    RegionPatch,
    ZoomSettingsIn,
    ZoomSettingsOut,
)
