"""
Pan/zoom geometry for the canvas viewer.

The rendering surface is abstracted behind the Viewport protocol; the
functions here only compute transforms (scale plus pan offset in container
pixels) and apply them through that protocol.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from canvas_journal.client.state import HotspotView
from canvas_journal.services.canvas_service import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH

# Share of the container the fitted image may occupy.
FIT_MARGIN = 0.9


class Viewport(Protocol):
    """Capabilities the viewer needs from a pan/zoom surface."""

    def zoom_to(self, x: float, y: float, scale: float) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...


@dataclass(frozen=True)
class Transform:
    scale: float
    pan_x: float
    pan_y: float


def fit_transform(
    container_width: float,
    container_height: float,
    image_width: Optional[float] = None,
    image_height: Optional[float] = None,
) -> Transform:
    """
    Scale the image to 90% of the limiting container dimension and center it.

    A missing or zero natural size falls back to the default canvas size.
    """
    image_width = image_width or DEFAULT_CANVAS_WIDTH
    image_height = image_height or DEFAULT_CANVAS_HEIGHT

    scale = min(container_width / image_width, container_height / image_height) * FIT_MARGIN
    pan_x = (container_width - image_width * scale) / 2
    pan_y = (container_height - image_height * scale) / 2
    return Transform(scale=scale, pan_x=pan_x, pan_y=pan_y)


def focus_transform(
    hotspot: HotspotView,
    container_width: float,
    container_height: float,
    zoom: float,
) -> Transform:
    """Bring the hotspot's center to the container center at `zoom`."""
    center_x, center_y = hotspot.center
    return Transform(
        scale=zoom,
        pan_x=container_width / 2 - center_x * zoom,
        pan_y=container_height / 2 - center_y * zoom,
    )


def apply(viewport: Viewport, transform: Transform) -> None:
    viewport.zoom_to(0, 0, transform.scale)
    viewport.move_to(transform.pan_x, transform.pan_y)


def center(
    viewport: Viewport,
    container_width: float,
    container_height: float,
    image_width: Optional[float] = None,
    image_height: Optional[float] = None,
) -> Transform:
    transform = fit_transform(container_width, container_height, image_width, image_height)
    apply(viewport, transform)
    return transform
