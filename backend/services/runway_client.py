"""
RunwayML API Wrapper

Image-to-video animation of the product photo with the gen3a_turbo model.
"""

import base64
from pathlib import Path
from typing import Optional

import aiofiles
import httpx

from config import settings
from pipeline.error_handler import VendorAPIError
from services.polling import TaskPending, VendorTaskFailed, poll_until_complete, read_status_payload
from services.vendor_client import VendorClient


RUNWAY_MODEL = "gen3a_turbo"
RUNWAY_DURATION = 5
RUNWAY_RATIO = "1280:768"  # landscape; "768:1280" is portrait

IMAGE_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
}


def image_mime_type(image_path: str) -> str:
    return IMAGE_MIME_TYPES.get(Path(image_path).suffix.lower(), "image/jpeg")


async def encode_data_uri(image_path: str) -> str:
    """Read an image and encode it as a base64 data URI"""
    async with aiofiles.open(image_path, "rb") as f:
        data = await f.read()
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{image_mime_type(image_path)};base64,{encoded}"


class RunwayClient(VendorClient):
    """Client for RunwayML ``/v1/image_to_video`` and ``/v1/tasks``"""

    service_name = "runwayml"
    credential_env = "RUNWAYML_API_KEY"

    def __init__(
        self,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
    ):
        super().__init__(api_key if api_key is not None else settings.RUNWAYML_API_KEY, http_client)
        self.base_url = (base_url or settings.RUNWAYML_BASE_URL).rstrip("/")

    def _auth_headers(self):
        return {
            "Authorization": f"Bearer {self.api_key}",
            "X-Runway-Version": settings.RUNWAYML_API_VERSION,
        }

    async def create_image_to_video(self, image_path: str, prompt_text: str) -> str:
        """
        Start an image-to-video task.

        Returns:
            Task id
        """
        payload = {
            "promptImage": await encode_data_uri(image_path),
            "model": RUNWAY_MODEL,
            "promptText": prompt_text,
            "duration": RUNWAY_DURATION,
            "ratio": RUNWAY_RATIO,
        }

        response = await self._request("POST", f"{self.base_url}/v1/image_to_video", json=payload)
        self._require_success(response, "image_to_video")

        task_id = self._json(response, "image_to_video").get("id")
        if not task_id:
            raise VendorAPIError(self.service_name, "no task id in image_to_video response")

        self.logger.info("runway_task_created", task_id=task_id, model=RUNWAY_MODEL)
        return task_id

    async def get_task_result(self, task_id: str) -> str:
        response = await self._request("GET", f"{self.base_url}/v1/tasks/{task_id}")
        payload = read_status_payload(response)

        status = payload.get("status")
        if status == "SUCCEEDED":
            outputs = payload.get("output")
            if not outputs or not isinstance(outputs, list) or not isinstance(outputs[0], str):
                raise VendorTaskFailed(self.service_name, task_id, "no output in succeeded task")
            return outputs[0]
        if status == "FAILED":
            raise VendorTaskFailed(self.service_name, task_id, payload.get("failure") or "unknown error")

        raise TaskPending(status)

    async def wait_for_task(self, task_id: str) -> str:
        """
        Poll a task until it succeeds.

        Returns:
            URL of the generated product video
        """
        return await poll_until_complete(
            lambda: self.get_task_result(task_id),
            service=self.service_name,
            task_id=task_id,
        )
