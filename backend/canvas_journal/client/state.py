"""
Client application state.

What:  The viewer's in-memory model: canvas size, zoom settings, the visible
       hotspots flattened for rendering, and the sequence navigation cursor.
How:   Built once from a payload document (API response or bundled JSON).
       Hotspots flagged `enabled: false` are dropped on load; the remaining
       ones are kept in sequence order.

Navigation:
    current_index starts unset (-1). next() from unset lands on the first
    hotspot, previous() from unset on the last; both wrap around.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from canvas_journal.schemas import CanvasOut, ZoomSettingsOut
from canvas_journal.services.canvas_service import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_MAX_ZOOM,
    DEFAULT_MIN_ZOOM,
    DEFAULT_ZOOM_ON_CLICK,
)

UNSET = -1

TYPE_LABELS = {"text": "TXT", "image": "IMG", "video": "VID"}


@dataclass
class HotspotView:
    """One hotspot with region and content flattened onto a single record."""
    id: str
    name: str
    type: str
    x: float
    y: float
    width: float
    height: float
    title: str = ""
    description: str = ""
    image: str = ""
    video: str = ""
    sequence: int = 0

    @classmethod
    def from_entry(cls, entry: Dict[str, Any]) -> "HotspotView":
        region = entry["region"]
        content = entry.get("content") or {}
        return cls(
            id=str(entry["id"]),
            name=entry.get("name", ""),
            type=entry.get("type") or "text",
            x=region["x"],
            y=region["y"],
            width=region["width"],
            height=region["height"],
            title=content.get("title") or "",
            description=content.get("description") or "",
            image=content.get("image") or "",
            video=content.get("video") or "",
            sequence=entry.get("sequence", 0),
        )

    @property
    def center(self):
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def label(self) -> str:
        """Design-mode label, e.g. '12 [IMG]'."""
        return f"{self.id} [{TYPE_LABELS.get(self.type, 'TXT')}]"


def default_canvas() -> CanvasOut:
    return CanvasOut(width=DEFAULT_CANVAS_WIDTH, height=DEFAULT_CANVAS_HEIGHT)


def default_settings() -> ZoomSettingsOut:
    return ZoomSettingsOut(
        zoom_on_click=DEFAULT_ZOOM_ON_CLICK,
        min_zoom=DEFAULT_MIN_ZOOM,
        max_zoom=DEFAULT_MAX_ZOOM,
    )


@dataclass
class CanvasState:
    canvas: CanvasOut = field(default_factory=default_canvas)
    settings: ZoomSettingsOut = field(default_factory=default_settings)
    hotspots: List[HotspotView] = field(default_factory=list)
    sequence_order: List[str] = field(default_factory=list)
    current_index: int = UNSET

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "CanvasState":
        state = cls()
        if data.get("canvas"):
            state.canvas = CanvasOut.model_validate(data["canvas"])
        if data.get("settings"):
            state.settings = ZoomSettingsOut.model_validate(data["settings"])
        entries = data.get("hotspots") or []
        if not isinstance(entries, list):
            raise TypeError("hotspots must be a list")
        if not all(isinstance(entry, dict) for entry in entries):
            raise TypeError("every hotspot must be an object")
        state.hotspots = [
            HotspotView.from_entry(entry)
            for entry in entries
            if entry.get("enabled") is not False
        ]
        state.rebuild_order()
        return state

    def rebuild_order(self) -> None:
        """Re-sort hotspots by sequence (stable) and rebuild the navigation index."""
        self.hotspots.sort(key=lambda h: h.sequence)
        self.sequence_order = [h.id for h in self.hotspots]

    def find(self, hotspot_id: str) -> Optional[HotspotView]:
        for hotspot in self.hotspots:
            if hotspot.id == hotspot_id:
                return hotspot
        return None

    def current(self) -> Optional[HotspotView]:
        if self.current_index == UNSET or not self.sequence_order:
            return None
        return self.find(self.sequence_order[self.current_index])

    def next(self) -> Optional[HotspotView]:
        if not self.sequence_order:
            return None
        self.current_index += 1
        if self.current_index >= len(self.sequence_order):
            self.current_index = 0
        return self.current()

    def previous(self) -> Optional[HotspotView]:
        if not self.sequence_order:
            return None
        self.current_index -= 1
        if self.current_index < 0:
            self.current_index = len(self.sequence_order) - 1
        return self.current()

    def reset(self) -> None:
        self.current_index = UNSET
