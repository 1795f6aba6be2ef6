"""
Viewer controller: wires state, viewport, modal and design mode together.

Keyboard (right-to-left reading order):
    ArrowLeft   next hotspot
    ArrowRight  previous hotspot
    Escape      close the modal
"""

from typing import Optional

from canvas_journal.client.design import DesignSession, design_mode_allowed
from canvas_journal.client.modal import Modal, ModalController
from canvas_journal.client.state import CanvasState, HotspotView
from canvas_journal.client.viewport import Transform, Viewport, apply, center, focus_transform


class CanvasApp:
    def __init__(
        self,
        state: CanvasState,
        viewport: Viewport,
        container_width: float,
        container_height: float,
        hostname: str = "",
    ) -> None:
        self.state = state
        self.viewport = viewport
        self.container_width = container_width
        self.container_height = container_height
        self.modal = ModalController()
        self.design = DesignSession(state, viewport, self.modal)
        self.design_available = design_mode_allowed(hostname)

    def center(self) -> Transform:
        return center(
            self.viewport,
            self.container_width,
            self.container_height,
            self.state.canvas.width,
            self.state.canvas.height,
        )

    def zoom_to_hotspot(self, hotspot: HotspotView) -> Transform:
        transform = focus_transform(
            hotspot,
            self.container_width,
            self.container_height,
            self.state.settings.zoom_on_click,
        )
        apply(self.viewport, transform)
        return transform

    def activate(self, hotspot_id: str) -> Optional[Modal]:
        """Hotspot click or tap. Inert while design mode is active."""
        if self.design.active:
            return None
        hotspot = self.state.find(hotspot_id)
        if hotspot is None:
            return None
        return self.modal.show(hotspot)

    def next(self) -> Optional[Modal]:
        hotspot = self.state.next()
        return self.modal.show(hotspot) if hotspot else None

    def previous(self) -> Optional[Modal]:
        hotspot = self.state.previous()
        return self.modal.show(hotspot) if hotspot else None

    def reset(self) -> Transform:
        self.state.reset()
        self.modal.hide()
        return self.center()

    def handle_key(self, key: str) -> None:
        if key == "Escape":
            self.modal.hide()
        elif key == "ArrowLeft":
            self.next()
        elif key == "ArrowRight":
            self.previous()

    def enter_design_mode(self) -> bool:
        if not self.design_available:
            return False
        self.design.enter()
        return True

    def exit_design_mode(self) -> None:
        self.design.exit()
        self.center()
