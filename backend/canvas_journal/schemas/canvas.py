"""
Project Canvas Backend - Pydantic Request/Response Schemas
===========================================================

What:  Pydantic models for the canonical payload shape shared by the public
       API, the admin export, the sync utility and design-mode output.
How:   FastAPI validates request bodies against the *In / *Patch models and
       serializes responses through the *Out models. Wire names are camelCase
       (zoomOnClick, minZoom, maxZoom) through field aliases.
Who:   Route handlers, services, the sync utility and the client package.

Payload shape:
    {
      "canvas":   {"width": n, "height": n},
      "settings": {"zoomOnClick": n, "minZoom": n, "maxZoom": n},
      "hotspots": [
        {"id", "name", "enabled"?, "type", "region": {x, y, width, height},
         "content": {title, description, image, video}, "sequence"}
      ]
    }

Input models keep the presence-checked hotspot fields optional: the presence
check is a service rule (400 with a generic message on the admin API, a
skipped row in the sync utility), not a schema rule.
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

HotspotType = Literal["text", "image", "video"]

# Integral values round-trip as JSON integers, others stay floats.
Number = Union[int, float]


# ══════════════════════════════════════════════════════════════════════════
# Shared building blocks
# ══════════════════════════════════════════════════════════════════════════


class Region(BaseModel):
    """Pixel rectangle on the canvas, in CanvasConfig coordinate space."""
    x: Number
    y: Number
    width: Number
    height: Number


class RegionPatch(BaseModel):
    """Partial region for PUT; every omitted coordinate keeps its stored value."""
    x: Optional[Number] = None
    y: Optional[Number] = None
    width: Optional[Number] = None
    height: Optional[Number] = None


class ContentIn(BaseModel):
    """Hotspot content as sent by clients. Omitted strings default to ''."""
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    video: Optional[str] = None


class ContentOut(BaseModel):
    title: str = ""
    description: str = ""
    image: str = ""
    video: str = ""


class CanvasIn(BaseModel):
    width: int
    height: int


class CanvasOut(BaseModel):
    width: int = Field(description="Native image width in pixels")
    height: int = Field(description="Native image height in pixels")


class ZoomSettingsIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    zoom_on_click: Optional[Number] = Field(default=None, alias="zoomOnClick")
    min_zoom: Optional[Number] = Field(default=None, alias="minZoom")
    max_zoom: Optional[Number] = Field(default=None, alias="maxZoom")


class ZoomSettingsOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    zoom_on_click: Number = Field(alias="zoomOnClick", description="Zoom level on hotspot activation")
    min_zoom: Number = Field(alias="minZoom")
    max_zoom: Number = Field(alias="maxZoom")


# ══════════════════════════════════════════════════════════════════════════
# Hotspot request models
# ══════════════════════════════════════════════════════════════════════════


class HotspotIn(BaseModel):
    """
    One hotspot as accepted by POST /api/admin/hotspots, bulk replace and
    the sync utility.

    Required by the presence check: id, name, region, content, sequence.
    Defaults on write: enabled=True, type='text'.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: Optional[str] = None
    name: Optional[str] = None
    enabled: Optional[bool] = None
    type: Optional[HotspotType] = None
    region: Optional[Region] = None
    content: Optional[ContentIn] = None
    sequence: Optional[int] = None

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent (empty strings count as absent)."""
        missing = []
        if not self.id:
            missing.append("id")
        if not self.name:
            missing.append("name")
        if self.region is None:
            missing.append("region")
        if self.content is None:
            missing.append("content")
        if self.sequence is None:
            missing.append("sequence")
        return missing


class HotspotPatch(BaseModel):
    """Partial update for PUT /api/admin/hotspots/{id}."""
    name: Optional[str] = None
    enabled: Optional[bool] = None
    type: Optional[HotspotType] = None
    region: Optional[RegionPatch] = None
    content: Optional[ContentIn] = None
    sequence: Optional[int] = None


class BulkRequest(BaseModel):
    """
    Body of POST /api/admin/bulk.

    `hotspots` present (even as an empty list) replaces the whole table;
    absent leaves it untouched.
    """
    canvas: Optional[CanvasIn] = None
    settings: Optional[ZoomSettingsIn] = None
    hotspots: Optional[List[HotspotIn]] = None


# ══════════════════════════════════════════════════════════════════════════
# Response models
# ══════════════════════════════════════════════════════════════════════════


class HotspotOut(BaseModel):
    """
    Serialized hotspot. `enabled` is None (and dropped from the JSON) unless
    the stored row is disabled and the caller asked for export output.
    """
    id: str
    name: str
    enabled: Optional[bool] = None
    type: HotspotType = "text"
    region: Region
    content: ContentOut
    sequence: int


class CanvasPayload(BaseModel):
    """The canonical rendering payload."""
    canvas: CanvasOut
    settings: ZoomSettingsOut
    hotspots: List[HotspotOut] = Field(default_factory=list)

    def to_document(self) -> dict:
        """Plain JSON-ready dict with wire names and elided None values."""
        return self.model_dump(by_alias=True, exclude_none=True)


class OkResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {"error": "not_found", "message": "hotspot with ID '9' was not found",
         "request_id": "a1b2c3d4"}
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Always 'ok' while the process serves requests")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
