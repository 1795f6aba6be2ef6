"""
Payload loading for the viewer.

Source selection:
    page served from localhost / 127.0.0.1   → bundled js/data.json
    any other host with an API base URL      → {API_BASE_URL}/api/canvas
    any other host without one               → bundled js/data.json

Any transport error, non-2xx status or non-JSON body becomes a
ClientLoadError carrying the single user-facing message.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from canvas_journal.client.state import CanvasState

logger = logging.getLogger(__name__)

API_PATH = "/api/canvas"
BUNDLED_DATA_PATH = "js/data.json"
LOCAL_HOSTS = {"localhost", "127.0.0.1"}
LOAD_ERROR_MESSAGE = "Unable to load content. Please try again later."


class ClientLoadError(Exception):
    def __init__(self, message: str = LOAD_ERROR_MESSAGE):
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class DataSource:
    kind: str  # "api" or "bundled"
    url: str


def resolve_data_source(page_url: str, api_base_url: Optional[str] = None) -> DataSource:
    page = httpx.URL(page_url)
    if page.host not in LOCAL_HOSTS and api_base_url:
        return DataSource(kind="api", url=api_base_url.rstrip("/") + API_PATH)
    return DataSource(kind="bundled", url=str(page.join(BUNDLED_DATA_PATH)))


async def load_payload(
    source: DataSource, client: Optional[httpx.AsyncClient] = None
) -> Dict[str, Any]:
    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=10.0)
    try:
        response = await client.get(source.url)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Failed to load data from %s: %s", source.url, str(e))
        raise ClientLoadError() from e
    finally:
        if owns_client:
            await client.aclose()

    if not isinstance(data, dict):
        logger.error("Failed to load data from %s: payload is not an object", source.url)
        raise ClientLoadError()
    return data


async def load_state(
    source: DataSource, client: Optional[httpx.AsyncClient] = None
) -> CanvasState:
    data = await load_payload(source, client)
    try:
        state = CanvasState.from_payload(data)
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Malformed payload from %s: %s", source.url, str(e))
        raise ClientLoadError() from e
    logger.info("Loaded %d hotspots", len(state.hotspots))
    return state
