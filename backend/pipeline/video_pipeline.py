"""
Video Pipeline - avatar, product animation and compositing

Coordinates the external video services for one project:
1. Talking avatar of the presenter (D-ID)
2. Animated product shot (RunwayML, or D-ID as an alternative)
3. Picture-in-picture composite of both (Shotstack)

Each step follows the same shape: create a vendor task, poll it to a
terminal state, download the result. Steps run strictly in sequence and a
failure aborts the remaining steps with a step-specific PipelineError.

Provider routing (AI_PROVIDER):
- mock: placeholder file, no external calls
- did: avatar only, or the full three-step pipeline when USE_FULL_AI_PIPELINE
- synthesia: single stock-avatar video
"""

from pathlib import Path
from typing import Optional

import httpx
import structlog

from config import settings
from pipeline.asset_manager import AssetManager
from pipeline.error_handler import ErrorCode, PipelineError, stage_error
from pipeline.script_generator import build_avatar_script, optimize_script_length
from pipeline.templates import (
    DEFAULT_AVATAR_SCRIPT,
    DEFAULT_PRODUCT_VIDEO_STYLE,
    product_video_prompt,
    product_video_script,
)
from services.did_client import DIDClient
from services.file_host import TemporaryFileHost
from services.runway_client import RunwayClient
from services.shotstack_client import (
    DEFAULT_DURATION,
    LAYOUT_PRODUCT_MAIN,
    ShotstackClient,
    build_timeline,
)
from services.synthesia_client import SynthesiaClient


logger = structlog.get_logger(__name__)


PROVIDER_MOCK = "mock"
PROVIDER_DID = "did"
PROVIDER_SYNTHESIA = "synthesia"

PRODUCT_PROVIDER_RUNWAYML = "runwayml"
PRODUCT_PROVIDER_DID = "did"

# D-ID accepts these presenter formats; anything else uses the stock presenter
DID_PRESENTER_EXTENSIONS = (".png", ".jpg", ".jpeg")


class VideoPipeline:
    """
    Generate the marketing video for a project.

    Vendor clients are created on first use, so a provider only needs the
    credentials of the services it actually calls.

    Example:
        >>> pipeline = VideoPipeline()
        >>> path = await pipeline.generate_video(
        ...     product_image_path="./uploads/product.png",
        ...     person_media_path="./uploads/presenter.jpg",
        ...     person_media_type="image",
        ...     script="Wait for it! ...",
        ... )
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        use_full_pipeline: Optional[bool] = None,
        product_video_provider: Optional[str] = None,
        asset_manager: Optional[AssetManager] = None,
        file_host: Optional[TemporaryFileHost] = None,
        did_client: Optional[DIDClient] = None,
        runway_client: Optional[RunwayClient] = None,
        shotstack_client: Optional[ShotstackClient] = None,
        synthesia_client: Optional[SynthesiaClient] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.provider = (provider or settings.AI_PROVIDER).lower()
        self.use_full_pipeline = settings.USE_FULL_AI_PIPELINE if use_full_pipeline is None else use_full_pipeline
        self.product_video_provider = (product_video_provider or settings.PRODUCT_VIDEO_PROVIDER).lower()
        self._http_client = http_client

        self.asset_manager = asset_manager or AssetManager(http_client=http_client)
        self.file_host = file_host or TemporaryFileHost(http_client=http_client)
        self._did = did_client
        self._runway = runway_client
        self._shotstack = shotstack_client
        self._synthesia = synthesia_client

        self.logger = logger.bind(provider=self.provider, full_pipeline=self.use_full_pipeline)

    @property
    def did(self) -> DIDClient:
        if self._did is None:
            self._did = DIDClient(http_client=self._http_client)
        return self._did

    @property
    def runway(self) -> RunwayClient:
        if self._runway is None:
            self._runway = RunwayClient(http_client=self._http_client)
        return self._runway

    @property
    def shotstack(self) -> ShotstackClient:
        if self._shotstack is None:
            self._shotstack = ShotstackClient(http_client=self._http_client)
        return self._shotstack

    @property
    def synthesia(self) -> SynthesiaClient:
        if self._synthesia is None:
            self._synthesia = SynthesiaClient(http_client=self._http_client)
        return self._synthesia

    async def generate_video(
        self,
        product_image_path: str,
        person_media_path: Optional[str],
        person_media_type: Optional[str],
        script: str,
        product_video_style: Optional[str] = None,
        layout: Optional[str] = None,
    ) -> str:
        """
        Generate the final video with the configured provider.

        Returns:
            Local path of the final video under GENERATED_VIDEO_PATH

        Raises:
            PipelineError: With the failing step's code and details
        """
        product_video_style = product_video_style or DEFAULT_PRODUCT_VIDEO_STYLE
        layout = layout or LAYOUT_PRODUCT_MAIN

        self.logger.info(
            "video_generation_started",
            product_video_style=product_video_style,
            layout=layout,
            person_media_type=person_media_type,
        )

        if self.provider == PROVIDER_DID:
            if self.use_full_pipeline:
                return await self.run_full_pipeline(
                    product_image_path,
                    person_media_path,
                    script,
                    product_video_style,
                    layout,
                )
            return await self.generate_avatar_video(person_media_path, script)

        if self.provider == PROVIDER_SYNTHESIA:
            return await self.generate_synthesia_video(script)

        if self.provider != PROVIDER_MOCK:
            self.logger.warning("unknown_ai_provider_using_mock")
        return await self.asset_manager.write_placeholder_video()

    async def run_full_pipeline(
        self,
        product_image_path: str,
        person_media_path: Optional[str],
        script: str,
        product_video_style: str = DEFAULT_PRODUCT_VIDEO_STYLE,
        layout: str = LAYOUT_PRODUCT_MAIN,
    ) -> str:
        """
        Avatar -> product video -> composite, strictly in sequence.
        """
        # Avatar speech longer than the composite would be cut mid-sentence
        avatar_text = optimize_script_length(build_avatar_script(script), DEFAULT_DURATION)

        self.logger.info("full_pipeline_step_started", step=1, name="avatar")
        avatar_path = await self.generate_avatar_video(person_media_path, script, avatar_text=avatar_text)

        self.logger.info("full_pipeline_step_started", step=2, name="product_video")
        product_path = await self.generate_product_video(product_image_path, product_video_style)

        self.logger.info("full_pipeline_step_started", step=3, name="composite")
        final_path = await self.composite_videos(product_path, avatar_path, layout)

        if not settings.KEEP_INTERMEDIATE_ASSETS:
            self.asset_manager.cleanup(avatar_path, product_path)

        self.logger.info("full_pipeline_completed", video_path=final_path)
        return final_path

    async def _presenter_source_url(self, person_media_path: Optional[str]) -> str:
        """
        Public URL of the presenter image for D-ID.

        Videos, unsupported formats and failed uploads fall back to the
        default presenter.
        """
        default_url = settings.DID_DEFAULT_PRESENTER_URL
        if not person_media_path or Path(person_media_path).suffix.lower() not in DID_PRESENTER_EXTENSIONS:
            self.logger.info("presenter_default_used", reason="unsupported_media")
            return default_url

        try:
            return await self.did.upload_image(person_media_path)
        except PipelineError as e:
            if e.code == ErrorCode.MISSING_CREDENTIALS:
                raise
            self.logger.warning("presenter_upload_failed_using_default", error=str(e))
            return default_url
        except (httpx.HTTPError, OSError) as e:
            self.logger.warning("presenter_upload_failed_using_default", error=str(e))
            return default_url

    async def generate_avatar_video(
        self,
        person_media_path: Optional[str],
        script: str,
        avatar_text: Optional[str] = None,
    ) -> str:
        """
        Step 1: talking avatar.

        Returns:
            Local path of the downloaded avatar video
        """
        try:
            source_url = await self._presenter_source_url(person_media_path)
            talk_id = await self.did.create_talk(source_url, avatar_text or build_avatar_script(script))
            result_url = await self.did.wait_for_talk(talk_id)
            return await self.asset_manager.download_video(result_url)
        except Exception as e:
            self.logger.error("avatar_generation_failed", error=str(e))
            raise stage_error(ErrorCode.AVATAR_GENERATION_FAILED, e, step=1, step_name="avatar")

    async def generate_product_video(self, product_image_path: str, product_video_style: str) -> str:
        """
        Step 2: animated product shot.

        Returns:
            Local path of the downloaded product video
        """
        try:
            if not product_image_path:
                raise PipelineError(ErrorCode.MISSING_REQUIRED_FIELD, "product image path is required")

            if self.product_video_provider == PRODUCT_PROVIDER_DID:
                source_url = await self.did.upload_image(product_image_path)
                talk_id = await self.did.create_talk(source_url, product_video_script(product_video_style))
                result_url = await self.did.wait_for_talk(talk_id)
            else:
                task_id = await self.runway.create_image_to_video(
                    product_image_path,
                    product_video_prompt(product_video_style),
                )
                result_url = await self.runway.wait_for_task(task_id)

            return await self.asset_manager.download_video(result_url)
        except Exception as e:
            self.logger.error("product_video_failed", error=str(e), provider=self.product_video_provider)
            raise stage_error(
                ErrorCode.PRODUCT_VIDEO_FAILED,
                e,
                step=2,
                step_name="product_video",
                provider=self.product_video_provider,
            )

    async def composite_videos(self, product_video_path: str, avatar_video_path: str, layout: str) -> str:
        """
        Step 3: picture-in-picture composite.

        Both local videos are uploaded to a temporary public host because
        Shotstack only reads sources by URL.
        """
        try:
            product_url = await self.file_host.upload_to_file_io(product_video_path)
            avatar_url = await self.file_host.upload_to_file_io(avatar_video_path)

            render_id = await self.shotstack.submit_render(build_timeline(product_url, avatar_url, layout))
            result_url = await self.shotstack.wait_for_render(render_id)
            return await self.asset_manager.download_video(result_url)
        except Exception as e:
            self.logger.error("compositing_failed", error=str(e))
            raise stage_error(ErrorCode.COMPOSITING_FAILED, e, step=3, step_name="composite", layout=layout)

    async def generate_synthesia_video(self, script: str) -> str:
        try:
            video_id = await self.synthesia.create_video(script or DEFAULT_AVATAR_SCRIPT)
            result_url = await self.synthesia.wait_for_video(video_id)
            return await self.asset_manager.download_video(result_url)
        except Exception as e:
            self.logger.error("synthesia_video_failed", error=str(e))
            raise stage_error(ErrorCode.VIDEO_GENERATION_FAILED, e, provider=PROVIDER_SYNTHESIA)


def create_video_pipeline() -> VideoPipeline:
    """Factory used by the API dependency layer"""
    return VideoPipeline()
