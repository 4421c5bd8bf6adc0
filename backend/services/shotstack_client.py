"""
Shotstack API Wrapper

Composites the product video and the avatar video into one picture-in-picture
clip. Shotstack needs publicly reachable source URLs, so callers upload the
intermediates to a temporary host first (see ``services.file_host``).
"""

from typing import Any, Dict, Optional

import httpx

from config import settings
from pipeline.error_handler import VendorAPIError
from services.polling import TaskPending, VendorTaskFailed, poll_until_complete, read_status_payload
from services.vendor_client import VendorClient


LAYOUT_PRODUCT_MAIN = "product_main"
LAYOUT_AVATAR_MAIN = "avatar_main"
LAYOUTS = (LAYOUT_PRODUCT_MAIN, LAYOUT_AVATAR_MAIN)

DEFAULT_DURATION = 15


def _fullscreen_clip(url: str, length: float) -> Dict[str, Any]:
    return {
        "asset": {"type": "video", "src": url},
        "start": 0,
        "length": length,
        "fit": "cover",
    }


def _overlay_clip(url: str, length: float, scale: float) -> Dict[str, Any]:
    return {
        "asset": {"type": "video", "src": url},
        "start": 0,
        "length": length,
        "position": "bottomRight",
        "offset": {"x": -0.02, "y": -0.02},
        "scale": scale,
    }


def build_timeline(
    product_url: str,
    avatar_url: str,
    layout: str = LAYOUT_PRODUCT_MAIN,
    duration: float = DEFAULT_DURATION,
) -> Dict[str, Any]:
    """
    Build a Shotstack edit for the two-video layout.

    ``product_main`` shows the product fullscreen with the avatar in a small
    bottom-right overlay; ``avatar_main`` swaps the two. The top track is
    listed first, as Shotstack expects.
    """
    if layout == LAYOUT_AVATAR_MAIN:
        main_clip = _fullscreen_clip(avatar_url, duration)
        overlay_clip = _overlay_clip(product_url, duration, 0.3)
    else:
        main_clip = _fullscreen_clip(product_url, duration)
        overlay_clip = _overlay_clip(avatar_url, duration, 0.25)

    return {
        "timeline": {
            "background": "#000000",
            "tracks": [
                {"clips": [overlay_clip]},
                {"clips": [main_clip]},
            ],
        },
        "output": {
            "format": "mp4",
            "resolution": "hd",
            "fps": 30,
        },
    }


class ShotstackClient(VendorClient):
    """Client for Shotstack ``/render``"""

    service_name = "shotstack"
    credential_env = "SHOTSTACK_API_KEY"

    def __init__(
        self,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
    ):
        super().__init__(api_key if api_key is not None else settings.SHOTSTACK_API_KEY, http_client)
        self.base_url = (base_url or settings.SHOTSTACK_BASE_URL).rstrip("/")

    def _auth_headers(self):
        return {"x-api-key": self.api_key}

    async def submit_render(self, edit: Dict[str, Any]) -> str:
        """
        Queue a render.

        Returns:
            Render id
        """
        response = await self._request("POST", f"{self.base_url}/render", json=edit)
        self._require_success(response, "render submission")

        body = self._json(response, "render submission").get("response")
        render_id = body.get("id") if isinstance(body, dict) else None
        if not render_id:
            raise VendorAPIError(self.service_name, "no render id in response")

        self.logger.info("shotstack_render_submitted", render_id=render_id)
        return render_id

    async def get_render_result(self, render_id: str) -> str:
        response = await self._request("GET", f"{self.base_url}/render/{render_id}")
        body = read_status_payload(response).get("response")
        if not isinstance(body, dict):
            raise TaskPending(None)

        status = body.get("status")
        if status == "done":
            video_url = body.get("url")
            if not video_url:
                raise VendorTaskFailed(self.service_name, render_id, "no video URL in finished render")
            return video_url
        if status == "failed":
            raise VendorTaskFailed(self.service_name, render_id, body.get("error") or "render failed")

        raise TaskPending(status)

    async def wait_for_render(self, render_id: str) -> str:
        """
        Poll a render until it is done.

        Returns:
            URL of the composited video
        """
        return await poll_until_complete(
            lambda: self.get_render_result(render_id),
            service=self.service_name,
            task_id=render_id,
        )
