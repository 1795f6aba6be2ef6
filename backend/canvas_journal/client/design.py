"""
Design mode: in-browser hotspot editing.

What:  Drag, corner-resize, add and rename hotspots, then emit the payload
       JSON for pasting back into data.json or the bulk endpoint.
How:   Geometry is pure (drag_rect / resize_rect on a Rect captured at
       pointer-down, plus the pointer delta). DesignSession applies results
       to the CanvasState and drives the viewport on enter/exit.

Rules:
    drag      x, y clamped to >= 0
    resize    min width 30, min height 20; the edge opposite the dragged
              corner stays fixed
    add       next numeric id, placed at 250,250 with size 120x60,
              sequence = hotspot count + 1
    rename    trimmed; ignored when empty, unchanged or already in use
    hosts     design mode is only offered on localhost / 127.0.0.1
"""

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from canvas_journal.client.modal import ModalController
from canvas_journal.client.state import CanvasState, HotspotView
from canvas_journal.client.viewport import Viewport

MIN_WIDTH = 30
MIN_HEIGHT = 20
CORNERS = ("nw", "ne", "sw", "se")
DESIGN_HOSTS = {"localhost", "127.0.0.1"}

NEW_HOTSPOT_X = 250
NEW_HOTSPOT_Y = 250
NEW_HOTSPOT_WIDTH = 120
NEW_HOTSPOT_HEIGHT = 60

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def design_mode_allowed(hostname: str) -> bool:
    return hostname in DESIGN_HOSTS


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def of(cls, hotspot: HotspotView) -> "Rect":
        return cls(hotspot.x, hotspot.y, hotspot.width, hotspot.height)


def drag_rect(start: Rect, dx: float, dy: float) -> Rect:
    return Rect(
        x=max(0, start.x + dx),
        y=max(0, start.y + dy),
        width=start.width,
        height=start.height,
    )


def resize_rect(start: Rect, corner: str, dx: float, dy: float) -> Rect:
    if corner not in CORNERS:
        raise ValueError(f"Unknown resize corner: {corner!r}")

    x, y, width, height = start.x, start.y, start.width, start.height

    if "e" in corner:
        width = max(MIN_WIDTH, start.width + dx)
    if "w" in corner:
        width = max(MIN_WIDTH, start.width - dx)
        x = start.x + start.width - width
    if "s" in corner:
        height = max(MIN_HEIGHT, start.height + dy)
    if "n" in corner:
        height = max(MIN_HEIGHT, start.height - dy)
        y = start.y + start.height - height

    return Rect(x=x, y=y, width=width, height=height)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _numeric_id(hotspot_id: str) -> int:
    match = _LEADING_INT.match(hotspot_id)
    return int(match.group(1)) if match else 0


def next_hotspot_id(state: CanvasState) -> str:
    return str(max([_numeric_id(h.id) for h in state.hotspots] + [0]) + 1)


def hotspot_document(hotspot: HotspotView) -> Dict[str, Any]:
    return {
        "id": hotspot.id,
        "name": hotspot.name,
        "type": hotspot.type or "text",
        "region": {
            "x": round_half_up(hotspot.x),
            "y": round_half_up(hotspot.y),
            "width": round_half_up(hotspot.width),
            "height": round_half_up(hotspot.height),
        },
        "content": {
            "title": hotspot.title,
            "description": hotspot.description,
            "image": hotspot.image or "",
            "video": hotspot.video or "",
        },
        "sequence": hotspot.sequence,
    }


class DesignSession:
    """
    Editing session over a loaded CanvasState.

    Edits (geometry, add and rename) are ignored while the session is not
    active, like pointer events outside design mode.
    """

    def __init__(
        self,
        state: CanvasState,
        viewport: Viewport,
        modal: Optional[ModalController] = None,
    ) -> None:
        self.state = state
        self.viewport = viewport
        self.modal = modal
        self.active = False

    def enter(self) -> None:
        self.active = True
        self.viewport.pause()
        self.viewport.zoom_to(0, 0, 1)
        self.viewport.move_to(0, 0)
        if self.modal is not None:
            self.modal.hide()

    def exit(self) -> None:
        self.active = False
        self.viewport.resume()

    def _apply(self, hotspot_id: str, rect: Rect) -> Optional[Rect]:
        hotspot = self.state.find(hotspot_id)
        if hotspot is None:
            return None
        hotspot.x, hotspot.y = rect.x, rect.y
        hotspot.width, hotspot.height = rect.width, rect.height
        return rect

    def move(self, hotspot_id: str, start: Rect, dx: float, dy: float) -> Optional[Rect]:
        if not self.active:
            return None
        return self._apply(hotspot_id, drag_rect(start, dx, dy))

    def resize(
        self, hotspot_id: str, start: Rect, corner: str, dx: float, dy: float
    ) -> Optional[Rect]:
        if not self.active:
            return None
        return self._apply(hotspot_id, resize_rect(start, corner, dx, dy))

    def add_hotspot(self, hotspot_type: str = "text") -> Optional[HotspotView]:
        if not self.active:
            return None
        new_id = next_hotspot_id(self.state)
        hotspot = HotspotView(
            id=new_id,
            name=f"New {new_id}",
            type=hotspot_type,
            x=NEW_HOTSPOT_X,
            y=NEW_HOTSPOT_Y,
            width=NEW_HOTSPOT_WIDTH,
            height=NEW_HOTSPOT_HEIGHT,
            sequence=len(self.state.hotspots) + 1,
        )
        self.state.hotspots.append(hotspot)
        self.state.rebuild_order()
        return hotspot

    def rename(self, old_id: str, new_id: str) -> bool:
        """Change a hotspot id; returns False when the edit is ignored."""
        if not self.active:
            return False
        new_id = new_id.strip()
        hotspot = self.state.find(old_id)
        if hotspot is None or not new_id or new_id == old_id:
            return False
        if self.state.find(new_id) is not None:
            return False
        hotspot.id = new_id
        self.state.sequence_order = [
            new_id if hotspot_id == old_id else hotspot_id
            for hotspot_id in self.state.sequence_order
        ]
        return True

    def to_document(self) -> Dict[str, Any]:
        return {
            "canvas": self.state.canvas.model_dump(),
            "settings": self.state.settings.model_dump(by_alias=True),
            "hotspots": [hotspot_document(h) for h in self.state.hotspots],
        }

    def generate_json(self) -> str:
        return json.dumps(self.to_document(), indent=2, ensure_ascii=False)
