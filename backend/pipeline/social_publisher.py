"""
Social Publisher - Instagram Reels

Builds the caption and posts the generated video. The Graph API only ingests
videos by public URL, so the local file is first pushed to 0x0.st.
"""

from typing import Optional, Tuple

import httpx
import structlog

from config import settings
from pipeline.error_handler import ErrorCode, stage_error
from pipeline.templates import (
    CAPTION_CALL_TO_ACTION,
    CAPTION_DESCRIPTION_LIMIT,
    CAPTION_HASHTAG_COUNT,
    CAPTION_HASHTAGS,
    CAPTION_HOOKS,
)
from services.file_host import TemporaryFileHost
from services.gemini_service import GeminiService
from services.instagram_client import InstagramClient


logger = structlog.get_logger(__name__)


def generate_instagram_caption(
    product_name: Optional[str],
    product_description: Optional[str],
    product_price: Optional[str],
) -> str:
    """
    Template caption for a product Reel.

    Example:
        >>> print(generate_instagram_caption("Desk Lamp", "", ""))  # doctest: +ELLIPSIS
        ⚡ Wait for it...
        <BLANKLINE>
        Introducing: Desk Lamp 🎉
        ...
    """
    name = product_name or ""
    hook = CAPTION_HOOKS[len(name) % len(CAPTION_HOOKS)]

    caption = f"{hook}\n\n"
    if name:
        caption += f"Introducing: {name} 🎉\n\n"

    if product_description:
        description = product_description[:CAPTION_DESCRIPTION_LIMIT]
        if len(product_description) > CAPTION_DESCRIPTION_LIMIT:
            description += "..."
        caption += f"{description}\n\n"

    if product_price and product_price not in ("$0", "0"):
        caption += f"💰 Price: {product_price}\n\n"

    caption += "\n"
    caption += " ".join(CAPTION_HASHTAGS[:CAPTION_HASHTAG_COUNT])
    caption += f"\n\n{CAPTION_CALL_TO_ACTION}"
    return caption


class SocialPublisher:
    """
    Publish a local video as an Instagram Reel.

    Steps: temporary public upload -> container create -> wait until the
    container is FINISHED -> publish.
    """

    def __init__(
        self,
        file_host: Optional[TemporaryFileHost] = None,
        gemini_service: Optional[GeminiService] = None,
        use_ai_captions: Optional[bool] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._http_client = http_client
        self.file_host = file_host or TemporaryFileHost(http_client=http_client)
        self._gemini = gemini_service
        self.use_ai_captions = settings.USE_AI_CAPTIONS if use_ai_captions is None else use_ai_captions

    async def build_caption(
        self,
        product_name: Optional[str],
        product_description: Optional[str],
        product_price: Optional[str],
    ) -> str:
        """AI-written caption when enabled, template caption otherwise or on failure"""
        if self.use_ai_captions:
            try:
                if self._gemini is None:
                    self._gemini = GeminiService()
                return await self._gemini.generate_instagram_caption(
                    product_name or "",
                    product_description or "",
                    product_price or "",
                )
            except Exception as e:
                logger.warning("ai_caption_fallback", error=str(e))
        return generate_instagram_caption(product_name, product_description, product_price)

    async def publish(
        self,
        video_path: str,
        caption: str,
        access_token: str,
        user_id: str,
    ) -> Tuple[str, str]:
        """
        Post the video.

        Returns:
            Tuple of (post_id, post_url)

        Raises:
            PipelineError: SOCIAL_PUBLISH_FAILED (or VENDOR_TIMEOUT) with vendor details
        """
        log = logger.bind(user_id=user_id, video_path=video_path)
        log.info("instagram_publish_started")

        try:
            client = InstagramClient(access_token, user_id, http_client=self._http_client)
            video_url = await self.file_host.upload_to_0x0(video_path)
            container_id = await client.create_container(video_url, caption)
            await client.wait_for_container(container_id)
            post_id, post_url = await client.publish_container(container_id)
        except Exception as e:
            log.error("instagram_publish_failed", error=str(e))
            raise stage_error(ErrorCode.SOCIAL_PUBLISH_FAILED, e, service="instagram")

        log.info("instagram_publish_completed", post_id=post_id, post_url=post_url)
        return post_id, post_url


def create_social_publisher() -> SocialPublisher:
    """Factory used by the API dependency layer"""
    return SocialPublisher()
