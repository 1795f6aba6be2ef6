"""
Hotspot detail modal.

What:  Decides which modal variant a hotspot opens and tracks the modal's
       open / loading / playback state.
How:   build_modal() maps a HotspotView onto a tagged union:

           type == "image" and an image URL   → ImageModal
           type == "video" and a video URL    → VideoModal
           anything else                      → TextModal (optional image)

       YouTube links (watch?v=, youtu.be/, /embed/) become an autoplay
       embed URL; any other video URL is played directly.

Loading indicator:
    Shown while an image or a direct video loads; cleared on load and on
    failure alike, without an error message. YouTube embeds show none.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

from canvas_journal.client.state import HotspotView

LOADING_TEXT = "جاري التحميل..."

YOUTUBE_URL = re.compile(r"(?:youtube\.com/(?:watch|embed)|youtu\.be/)")
YOUTUBE_WATCH_ID = re.compile(r"youtube\.com/watch\?.*v=([^&]+)")
YOUTUBE_SHORT_ID = re.compile(r"youtu\.be/([^?&]+)")
YOUTUBE_EMBED_ID = re.compile(r"youtube\.com/embed/([^?&]+)")


def is_youtube_url(url: str) -> bool:
    return bool(YOUTUBE_URL.search(url))


def youtube_embed_url(url: str) -> str:
    """Autoplay embed URL for a YouTube link, or '' when no video id is found."""
    for pattern in (YOUTUBE_WATCH_ID, YOUTUBE_SHORT_ID, YOUTUBE_EMBED_ID):
        match = pattern.search(url)
        if match:
            return f"https://www.youtube.com/embed/{match.group(1)}?autoplay=1"
    return ""


@dataclass(frozen=True)
class VideoSource:
    url: str
    embed_url: str = ""

    @property
    def is_youtube(self) -> bool:
        return bool(self.embed_url)

    @classmethod
    def from_url(cls, url: str) -> "VideoSource":
        if is_youtube_url(url):
            return cls(url=url, embed_url=youtube_embed_url(url))
        return cls(url=url)


@dataclass(frozen=True)
class TextModal:
    title: str
    description: str
    image: str = ""
    kind: str = "text"

    @property
    def has_asset(self) -> bool:
        return bool(self.image)


@dataclass(frozen=True)
class ImageModal:
    title: str
    image: str
    kind: str = "image"

    @property
    def has_asset(self) -> bool:
        return True


@dataclass(frozen=True)
class VideoModal:
    title: str
    source: VideoSource
    kind: str = "video"

    @property
    def has_asset(self) -> bool:
        return not self.source.is_youtube


Modal = Union[TextModal, ImageModal, VideoModal]


def build_modal(hotspot: HotspotView) -> Modal:
    if hotspot.type == "image" and hotspot.image:
        return ImageModal(title=hotspot.title, image=hotspot.image)
    if hotspot.type == "video" and hotspot.video:
        return VideoModal(title=hotspot.title, source=VideoSource.from_url(hotspot.video))
    return TextModal(title=hotspot.title, description=hotspot.description, image=hotspot.image)


class ModalController:
    """Open/close lifecycle of the single detail modal."""

    def __init__(self) -> None:
        self.current: Optional[Modal] = None
        self.loading = False
        self.playing = False

    @property
    def is_open(self) -> bool:
        return self.current is not None

    @property
    def indicator_text(self) -> str:
        """Text of the loading indicator, empty when nothing is loading."""
        return LOADING_TEXT if self.loading else ""

    def show(self, hotspot: HotspotView) -> Modal:
        self.stop_playback()
        modal = build_modal(hotspot)
        self.current = modal
        self.loading = modal.has_asset
        # Embeds autoplay; direct videos start once their data has loaded.
        self.playing = isinstance(modal, VideoModal) and modal.source.is_youtube
        return modal

    def asset_loaded(self) -> None:
        self.loading = False
        if isinstance(self.current, VideoModal) and not self.current.source.is_youtube:
            self.playing = True

    def asset_failed(self) -> None:
        self.loading = False

    def stop_playback(self) -> None:
        self.playing = False

    def hide(self) -> None:
        self.stop_playback()
        self.loading = False
        self.current = None
