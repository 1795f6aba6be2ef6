from canvas_journal.models.canvas import (  # noqa: F401
    SINGLETON_ID,
    CanvasConfig,
    Hotspot,
    ZoomSettings,
)
