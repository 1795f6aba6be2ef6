"""
Project Canvas Backend - Client Viewport, Modal, Design and Loader Tests
========================================================================

What we test:
    ✅ Fit transform: 90% of the limiting dimension, centered
    ✅ YouTube detection and embed URLs for watch?v=, youtu.be/ and /embed/
    ✅ Modal loading indicator and playback lifecycle
    ✅ Drag clamping, corner resize with minimums and fixed opposite edge
    ✅ add / rename / generate_json in design mode, nothing outside it
    ✅ Data source selection and load failures (httpx MockTransport)
"""

import json

import httpx
import pytest

from canvas_journal.client.design import (
    MIN_HEIGHT,
    MIN_WIDTH,
    DesignSession,
    Rect,
    drag_rect,
    resize_rect,
    round_half_up,
)
from canvas_journal.client.loader import (
    LOAD_ERROR_MESSAGE,
    ClientLoadError,
    DataSource,
    load_payload,
    load_state,
    resolve_data_source,
)
from canvas_journal.client.modal import (
    LOADING_TEXT,
    ImageModal,
    ModalController,
    TextModal,
    VideoModal,
    build_modal,
    is_youtube_url,
    youtube_embed_url,
)
from canvas_journal.client.state import CanvasState, HotspotView
from canvas_journal.client.viewport import fit_transform

API_SOURCE = DataSource("api", "https://api.example.com/api/canvas")


def view(**overrides):
    fields = dict(id="1", name="One", type="text", x=0, y=0, width=10, height=10)
    fields.update(overrides)
    return HotspotView(**fields)


class TestFitTransform:
    """Tests for centering the canvas in its container."""

    def test_width_limited(self):
        """A tall container scales by width and centers vertically."""
        t = fit_transform(1376, 1000, 1376, 768)

        assert t.scale == pytest.approx(0.9)
        assert t.pan_x == pytest.approx((1376 - 1376 * 0.9) / 2)
        assert t.pan_y == pytest.approx((1000 - 768 * 0.9) / 2)

    def test_height_limited(self):
        """A wide container scales by height."""
        t = fit_transform(4000, 384, 1376, 768)

        assert t.scale == pytest.approx(0.45)

    def test_zero_natural_size_uses_default_canvas(self):
        """An image without a natural size is fitted as 1376x768."""
        assert fit_transform(1376, 768, 0, 0) == fit_transform(1376, 768, 1376, 768)


class TestYouTube:
    """Tests for video host detection."""

    @pytest.mark.parametrize("url, video_id", [
        ("https://www.youtube.com/watch?v=abc123&t=10", "abc123"),
        ("https://www.youtube.com/watch?feature=share&v=xyz", "xyz"),
        ("https://youtu.be/short1?si=q", "short1"),
        ("https://www.youtube.com/embed/emb9", "emb9"),
    ])
    def test_embed_url(self, url, video_id):
        """Every YouTube link form maps to an autoplay embed URL."""
        assert is_youtube_url(url)
        assert youtube_embed_url(url) == f"https://www.youtube.com/embed/{video_id}?autoplay=1"

    def test_direct_video_not_youtube(self):
        """A plain file URL is played directly."""
        assert not is_youtube_url("https://cdn.example.com/clip.mp4")
        assert youtube_embed_url("https://cdn.example.com/clip.mp4") == ""


class TestModal:
    """Tests for modal variants and the ModalController lifecycle."""

    def test_image_without_url_falls_back_to_text(self):
        """An image hotspot with no image opens the text modal."""
        assert isinstance(build_modal(view(type="image")), TextModal)

    def test_video_without_url_falls_back_to_text(self):
        """A video hotspot with no video opens the text modal."""
        assert isinstance(build_modal(view(type="video")), TextModal)

    def test_image_modal(self):
        """The image variant carries only title and image."""
        modal = build_modal(view(type="image", image="big.jpg", title="T"))

        assert modal == ImageModal(title="T", image="big.jpg")

    def test_text_modal_with_image_shows_loading_until_loaded(self):
        """The loading indicator stays up until the image arrives."""
        controller = ModalController()

        controller.show(view(image="detail.jpg"))
        assert controller.loading
        assert controller.indicator_text == LOADING_TEXT

        controller.asset_loaded()
        assert not controller.loading
        assert controller.indicator_text == ""

    def test_text_without_image_has_no_loading(self):
        """Plain text opens without an indicator."""
        controller = ModalController()

        controller.show(view())

        assert not controller.loading
        assert controller.indicator_text == ""

    def test_failed_asset_clears_loading_silently(self):
        """A failed image load hides the indicator and keeps the modal open."""
        controller = ModalController()
        controller.show(view(type="image", image="missing.jpg"))

        controller.asset_failed()

        assert not controller.loading
        assert controller.is_open

    def test_direct_video_plays_after_load_and_stops_on_close(self):
        """A direct video starts once loaded and stops when the modal closes."""
        controller = ModalController()
        modal = controller.show(view(type="video", video="clip.mp4"))

        assert isinstance(modal, VideoModal)
        assert not modal.source.is_youtube
        assert controller.loading and not controller.playing

        controller.asset_loaded()
        assert controller.playing

        controller.hide()
        assert not controller.playing
        assert not controller.is_open

    def test_youtube_autoplays_without_loading(self):
        """YouTube embeds play at once and never show the indicator."""
        controller = ModalController()

        modal = controller.show(view(type="video", video="https://youtu.be/abc"))

        assert modal.source.embed_url == "https://www.youtube.com/embed/abc?autoplay=1"
        assert controller.playing
        assert not controller.loading

    def test_opening_another_modal_stops_playback(self):
        """Switching hotspots stops the running video."""
        controller = ModalController()
        controller.show(view(type="video", video="https://youtu.be/abc"))

        controller.show(view())

        assert not controller.playing


class TestGeometry:
    """Tests for the pure drag and resize functions."""

    def test_drag_clamps_at_zero(self):
        """Dragging past the top-left edge stops at 0."""
        assert drag_rect(Rect(10, 10, 50, 50), -30, 5) == Rect(0, 15, 50, 50)

    def test_resize_se_grows(self):
        """The se handle grows width and height from a fixed origin."""
        assert resize_rect(Rect(10, 10, 50, 50), "se", 20, 10) == Rect(10, 10, 70, 60)

    def test_resize_minimums(self):
        """Resizing never goes below 30x20."""
        rect = resize_rect(Rect(10, 10, 50, 50), "se", -100, -100)

        assert (rect.width, rect.height) == (MIN_WIDTH, MIN_HEIGHT)

    def test_resize_nw_keeps_opposite_edges(self):
        """A clamped nw resize keeps the right and bottom edges in place."""
        start = Rect(100, 100, 50, 50)

        rect = resize_rect(start, "nw", 40, 40)

        assert (rect.width, rect.height) == (MIN_WIDTH, MIN_HEIGHT)
        assert rect.x + rect.width == start.x + start.width
        assert rect.y + rect.height == start.y + start.height

    def test_resize_ne_moves_top_only(self):
        """The ne handle moves the top edge and grows the width."""
        rect = resize_rect(Rect(100, 100, 50, 50), "ne", 10, -10)

        assert rect == Rect(100, 90, 60, 60)

    def test_unknown_corner(self):
        """Only the four corner handles exist."""
        with pytest.raises(ValueError):
            resize_rect(Rect(0, 0, 1, 1), "n", 0, 0)

    def test_round_half_up(self):
        """Halves round up like the browser's Math.round."""
        assert [round_half_up(v) for v in (0.5, 1.5, 2.4, -0.5)] == [1, 2, 2, 0]


class TestDesignSession:
    """Tests for design-mode edits and JSON generation."""

    @pytest.fixture
    def session(self, sample_document, viewport):
        state = CanvasState.from_payload(sample_document)
        return DesignSession(state, viewport, ModalController())

    def test_enter_pauses_and_resets_scale(self, session):
        """Entering pauses pan/zoom and shows the canvas at scale 1."""
        session.enter()

        assert session.active
        assert session.viewport.calls == [("pause",), ("zoom_to", 0, 0, 1), ("move_to", 0, 0)]

    def test_edits_ignored_outside_design_mode(self, session):
        """Move, rename and add do nothing before enter()."""
        assert session.move("a", Rect(0, 0, 1, 1), 5, 5) is None
        assert not session.rename("a", "z")
        assert session.add_hotspot() is None
        assert session.state.sequence_order == ["a", "b", "c"]

    def test_move_updates_hotspot(self, session):
        """A drag writes the clamped rect back to the hotspot."""
        session.enter()

        session.move("a", Rect.of(session.state.find("a")), 5, -50)

        alpha = session.state.find("a")
        assert (alpha.x, alpha.y) == (15, 0)

    def test_add_hotspot_next_numeric_id(self, session):
        """A new hotspot takes the next numeric id and goes last."""
        session.enter()
        session.state.find("a").id = "12"

        added = session.add_hotspot("video")

        assert added.id == "13"
        assert added.name == "New 13"
        assert (added.x, added.y, added.width, added.height) == (250, 250, 120, 60)
        assert added.sequence == 4
        assert session.state.sequence_order[-1] == "13"

    def test_add_hotspot_without_numeric_ids(self, session):
        """With no numeric ids the first new hotspot is '1'."""
        session.enter()

        assert session.add_hotspot().id == "1"

    def test_rename_rules(self, session):
        """Empty, unchanged and taken names are refused; others are trimmed."""
        session.enter()

        assert not session.rename("a", "   ")
        assert not session.rename("a", "a")
        assert not session.rename("a", "b")
        assert session.rename("a", "  first ")
        assert session.state.find("first") is not None
        assert session.state.sequence_order[0] == "first"

    def test_generate_json_shape(self, session):
        """Generated JSON follows the payload shape with rounded coordinates."""
        document = json.loads(session.generate_json())

        assert document["canvas"] == {"width": 2000, "height": 1000}
        assert document["settings"] == {"zoomOnClick": 2, "minZoom": 0.25, "maxZoom": 4}
        gamma = document["hotspots"][2]
        assert gamma["region"]["x"] == 401
        assert gamma["content"] == {
            "title": "Gamma",
            "description": "",
            "image": "",
            "video": "https://youtu.be/abc123",
        }
        assert all("enabled" not in h for h in document["hotspots"])

    def test_generate_json_is_indented(self, session):
        """Output is indented with two spaces."""
        assert session.generate_json().startswith('{\n  "canvas"')


class TestLoader:
    """Tests for data source selection and payload loading."""

    def test_local_page_uses_bundled_data(self):
        """Pages served from localhost read the bundled JSON."""
        source = resolve_data_source("http://localhost:8000/index.html", "https://api.example.com")

        assert source == DataSource(kind="bundled", url="http://localhost:8000/js/data.json")

    def test_remote_page_uses_api(self):
        """Deployed pages with an API base read /api/canvas."""
        source = resolve_data_source("https://journal.example.com/", "https://api.example.com/")

        assert source == DataSource(kind="api", url="https://api.example.com/api/canvas")

    def test_remote_page_without_api_uses_bundled_data(self):
        """Deployed pages without an API base fall back to the bundled JSON."""
        source = resolve_data_source("https://journal.example.com/")

        assert source.kind == "bundled"

    @pytest.mark.asyncio
    async def test_load_state_from_api(self, sample_document):
        """A good response becomes a CanvasState of enabled hotspots."""
        def handler(request):
            assert request.url.path == "/api/canvas"
            return httpx.Response(200, json=sample_document)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            state = await load_state(API_SOURCE, client)

        assert state.sequence_order == ["a", "b", "c"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(500, json={"error": "server_error"}),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
    ])
    async def test_failures_raise_single_message(self, response):
        """Error statuses and non-object bodies give the one user message."""
        async with httpx.AsyncClient(transport=httpx.MockTransport(lambda request: response)) as client:
            with pytest.raises(ClientLoadError) as exc_info:
                await load_payload(API_SOURCE, client)

        assert exc_info.value.message == LOAD_ERROR_MESSAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hotspots", [[None], ["oops"], {"a": 1}, 5])
    async def test_malformed_hotspots_raise_single_message(self, hotspots):
        """A hotspots value that is not a list of objects is a load failure."""
        body = {"canvas": {"width": 10, "height": 10}, "hotspots": hotspots}

        def handler(request):
            return httpx.Response(200, json=body)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ClientLoadError) as exc_info:
                await load_state(API_SOURCE, client)

        assert exc_info.value.message == LOAD_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_transport_error(self):
        """A refused connection is a load failure too."""
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ClientLoadError):
                await load_payload(API_SOURCE, client)
