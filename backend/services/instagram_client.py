"""
Instagram Graph API Wrapper

Publishes a Reel in three steps: create a media container pointing at a public
video URL, wait for Instagram to finish processing it, then publish it.
"""

from typing import Optional, Tuple

import httpx

from config import settings
from pipeline.error_handler import VendorAPIError
from services.polling import TaskPending, VendorTaskFailed, poll_until_complete, read_status_payload
from services.vendor_client import VendorClient


def post_url_for(post_id: str) -> str:
    return f"https://www.instagram.com/p/{post_id}/"


class InstagramClient(VendorClient):
    """
    Client for the container-create / poll / publish protocol.

    The access token is sent in the request body as the Graph API expects.
    """

    service_name = "instagram"
    credential_env = "INSTAGRAM_ACCESS_TOKEN"

    def __init__(
        self,
        access_token: str,
        user_id: str,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
    ):
        super().__init__(access_token, http_client)
        self.user_id = user_id
        base = (base_url or settings.GRAPH_API_BASE_URL).rstrip("/")
        self.base_url = f"{base}/{settings.GRAPH_API_VERSION}"

    async def create_container(self, video_url: str, caption: str) -> str:
        payload = {
            "media_type": "REELS",
            "video_url": video_url,
            "caption": caption,
            "access_token": self.api_key,
        }

        response = await self._request("POST", f"{self.base_url}/{self.user_id}/media", json=payload)
        self._require_success(response, "media container creation", accepted=(200,))

        container_id = self._json(response, "media container creation").get("id")
        if not container_id:
            raise VendorAPIError(self.service_name, "container id not found in response")

        self.logger.info("instagram_container_created", container_id=container_id)
        return container_id

    async def get_container_status(self, container_id: str) -> str:
        response = await self._request(
            "GET",
            f"{self.base_url}/{container_id}",
            params={"fields": "status_code", "access_token": self.api_key},
        )
        status = read_status_payload(response).get("status_code")

        if status == "FINISHED":
            return container_id
        if status in ("ERROR", "EXPIRED"):
            raise VendorTaskFailed(self.service_name, container_id, f"container status {status}")

        raise TaskPending(status)

    async def wait_for_container(self, container_id: str) -> str:
        return await poll_until_complete(
            lambda: self.get_container_status(container_id),
            service=self.service_name,
            task_id=container_id,
            max_attempts=settings.INSTAGRAM_POLL_MAX_ATTEMPTS,
            interval=settings.INSTAGRAM_POLL_INTERVAL_SECONDS,
        )

    async def publish_container(self, container_id: str) -> Tuple[str, str]:
        """
        Publish a processed container.

        Returns:
            Tuple of (post_id, post_url)
        """
        payload = {
            "creation_id": container_id,
            "access_token": self.api_key,
        }

        response = await self._request("POST", f"{self.base_url}/{self.user_id}/media_publish", json=payload)
        self._require_success(response, "media publish", accepted=(200,))

        post_id = self._json(response, "media publish").get("id")
        if not post_id:
            raise VendorAPIError(self.service_name, "post id not found in response")

        post_url = post_url_for(post_id)
        self.logger.info("instagram_post_published", post_id=post_id, post_url=post_url)
        return post_id, post_url
