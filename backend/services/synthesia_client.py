"""
Synthesia API Wrapper

Stock-avatar video generation used when AI_PROVIDER=synthesia.
"""

from typing import Optional

import httpx

from config import settings
from pipeline.error_handler import VendorAPIError
from services.polling import TaskPending, VendorTaskFailed, poll_until_complete, read_status_payload
from services.vendor_client import VendorClient


SYNTHESIA_AVATAR = "anna_costume1_cameraA"
SYNTHESIA_BACKGROUND = "green_screen"


class SynthesiaClient(VendorClient):
    """Client for Synthesia ``/v2/videos``"""

    service_name = "synthesia"
    credential_env = "SYNTHESIA_API_KEY"

    def __init__(
        self,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
    ):
        super().__init__(api_key if api_key is not None else settings.synthesia_api_key, http_client)
        self.base_url = (base_url or settings.SYNTHESIA_BASE_URL).rstrip("/")

    def _auth_headers(self):
        return {"Authorization": self.api_key}

    async def create_video(self, script_text: str) -> str:
        payload = {
            "test": False,
            "input": [
                {
                    "scriptText": script_text,
                    "avatar": SYNTHESIA_AVATAR,
                    "background": SYNTHESIA_BACKGROUND,
                }
            ],
        }

        response = await self._request("POST", f"{self.base_url}/videos", json=payload)
        self._require_success(response, "video creation", accepted=(200, 201, 202))

        video_id = self._json(response, "video creation").get("id")
        if not video_id:
            raise VendorAPIError(self.service_name, "no video id in response")

        self.logger.info("synthesia_video_created", video_id=video_id)
        return video_id

    async def get_video_result(self, video_id: str) -> str:
        response = await self._request("GET", f"{self.base_url}/videos/{video_id}")
        payload = read_status_payload(response)

        status = payload.get("status")
        if status == "complete":
            download_url = payload.get("download")
            if not download_url:
                raise VendorTaskFailed(self.service_name, video_id, "no download URL in complete video")
            return download_url
        if status == "failed":
            raise VendorTaskFailed(self.service_name, video_id, "video generation failed")

        raise TaskPending(status)

    async def wait_for_video(self, video_id: str) -> str:
        return await poll_until_complete(
            lambda: self.get_video_result(video_id),
            service=self.service_name,
            task_id=video_id,
            interval=settings.SYNTHESIA_POLL_INTERVAL_SECONDS,
        )
