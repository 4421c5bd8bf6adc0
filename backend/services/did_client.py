"""
D-ID API Wrapper

Talking-avatar generation: upload a still image, ask D-ID to animate it
speaking a script with a Microsoft neural voice, then poll the talk until the
rendered video URL is available.
"""

import asyncio
from pathlib import Path
from typing import Optional

import httpx

from config import settings
from pipeline.error_handler import VendorAPIError
from services.file_upload import convert_to_png
from services.polling import TaskPending, VendorTaskFailed, poll_until_complete, read_status_payload
from services.vendor_client import VendorClient


class DIDClient(VendorClient):
    """
    Client for the D-ID ``/images`` and ``/talks`` endpoints.

    Usage:
        client = DIDClient()
        source_url = await client.upload_image("./uploads/presenter.jpg")
        talk_id = await client.create_talk(source_url, "Hello!")
        video_url = await client.wait_for_talk(talk_id)
    """

    service_name = "d-id"
    credential_env = "DID_API_KEY"

    def __init__(
        self,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
    ):
        super().__init__(api_key if api_key is not None else settings.DID_API_KEY, http_client)
        self.base_url = (base_url or settings.DID_BASE_URL).rstrip("/")

    def _auth_headers(self):
        return {"Authorization": f"Basic {self.api_key}"}

    async def upload_image(self, image_path: str) -> str:
        """
        Upload an image to D-ID, converting it to PNG first.

        Returns:
            D-ID hosted URL usable as a talk ``source_url``
        """
        png_bytes = await asyncio.to_thread(convert_to_png, image_path)
        filename = f"{Path(image_path).stem}.png"

        response = await self._request(
            "POST",
            f"{self.base_url}/images",
            files={"image": (filename, png_bytes, "image/png")},
        )
        self._require_success(response, "image upload")

        image_url = self._json(response, "image upload").get("url")
        if not image_url:
            raise VendorAPIError(self.service_name, "image URL not found in upload response")

        self.logger.info("did_image_uploaded", image_url=image_url)
        return image_url

    async def create_talk(self, source_url: str, script_text: str) -> str:
        """
        Start a talk rendering.

        Returns:
            Talk id
        """
        payload = {
            "source_url": source_url,
            "script": {
                "type": "text",
                "input": script_text,
                "provider": {
                    "type": "microsoft",
                    "voice_id": settings.DID_VOICE_ID,
                },
            },
            "config": {
                "fluent": True,
                "pad_audio": 0,
                "stitch": True,
            },
        }

        response = await self._request("POST", f"{self.base_url}/talks", json=payload)
        self._require_success(response, "talk creation")

        talk_id = self._json(response, "talk creation").get("id")
        if not talk_id:
            raise VendorAPIError(self.service_name, "talk id not found in response")

        self.logger.info("did_talk_created", talk_id=talk_id, script_words=len(script_text.split()))
        return talk_id

    async def get_talk_result(self, talk_id: str) -> str:
        """One status check for a talk; see ``services.polling``"""
        response = await self._request("GET", f"{self.base_url}/talks/{talk_id}")
        payload = read_status_payload(response)

        status = payload.get("status")
        if not isinstance(status, str):
            raise TaskPending(None)

        if status == "done":
            result_url = payload.get("result_url")
            if not result_url:
                raise VendorTaskFailed(self.service_name, talk_id, "no result_url in finished talk")
            return result_url
        if status == "error":
            error = payload.get("error")
            reason = error.get("message") if isinstance(error, dict) else error
            raise VendorTaskFailed(self.service_name, talk_id, reason or "unknown error")

        raise TaskPending(status)

    async def wait_for_talk(self, talk_id: str) -> str:
        """
        Poll a talk until it is done.

        Returns:
            URL of the rendered avatar video
        """
        return await poll_until_complete(
            lambda: self.get_talk_result(talk_id),
            service=self.service_name,
            task_id=talk_id,
        )
