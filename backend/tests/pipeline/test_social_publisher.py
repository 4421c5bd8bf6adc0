"""
Tests for Instagram caption building and publishing.
"""

from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from pipeline.error_handler import ErrorCode, PipelineError
from pipeline.social_publisher import SocialPublisher, generate_instagram_caption
from services.file_host import TemporaryFileHost
from services.gemini_service import GeminiService
from tests.utils import mock_http_client, request_json


@pytest.fixture
def mock_file_host():
    host = Mock(spec=TemporaryFileHost)
    host.upload_to_0x0 = AsyncMock(return_value="https://0x0.st/abc.mp4")
    return host


def graph_api(container_status="FINISHED"):
    """Graph API handler that records the caption it was sent"""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/media"):
            seen["caption"] = request_json(request)["caption"]
            return httpx.Response(200, json={"id": "container_1"})
        if path.endswith("/media_publish"):
            return httpx.Response(200, json={"id": "post_42"})
        if path.endswith("/container_1"):
            return httpx.Response(200, json={"status_code": container_status})
        return httpx.Response(404)

    return handler, seen


class TestGenerateInstagramCaption:

    def test_full_caption(self):
        caption = generate_instagram_caption("EcoBottle", "Keeps drinks cold all day.", "$29")

        assert caption == (
            "⚡ Wait for it...\n\n"
            "Introducing: EcoBottle 🎉\n\n"
            "Keeps drinks cold all day.\n\n"
            "💰 Price: $29\n\n"
            "\n"
            "#ProductLaunch #NewProduct #MustHave #ShopNow #Innovation #TechTok #ProductReview #Unboxing"
            "\n\n👉 Link in bio to learn more!"
        )

    @pytest.mark.parametrize("name,hook", [
        ("", "🔥 You NEED to see this!"),
        ("A", "✨ Game changer alert!"),
        ("Mug", "🚀 This is EVERYTHING!"),
        ("Lamp", "⚡ Wait for it..."),
        ("Chair", "🔥 You NEED to see this!"),
    ])
    def test_hook_depends_on_name_length(self, name, hook):
        assert generate_instagram_caption(name, "", "").startswith(hook + "\n\n")

    def test_no_intro_without_name(self):
        assert "Introducing" not in generate_instagram_caption(None, "desc", "$5")

    def test_long_description_truncated(self):
        caption = generate_instagram_caption("Lamp", "x" * 150, "")

        assert "x" * 100 + "...\n\n" in caption
        assert "x" * 101 not in caption

    def test_exact_limit_not_marked(self):
        caption = generate_instagram_caption("Lamp", "y" * 100, "")
        assert "y" * 100 + "\n\n" in caption

    @pytest.mark.parametrize("price", ["", None, "$0", "0"])
    def test_price_omitted(self, price):
        assert "Price" not in generate_instagram_caption("Lamp", "desc", price)

    def test_eight_hashtags_and_cta(self):
        caption = generate_instagram_caption("Lamp", "", "")

        assert len([word for word in caption.split() if word.startswith("#")]) == 8
        assert "#DealOfTheDay" not in caption
        assert caption.endswith("👉 Link in bio to learn more!")

    @pytest.mark.parametrize("name,description,price", [
        ("Lamp", "desc", "$5"),
        ("Lamp", "", ""),
        (None, None, None),
    ])
    def test_blank_line_before_hashtags(self, name, description, price):
        caption = generate_instagram_caption(name, description, price)

        assert "\n\n\n#ProductLaunch" in caption


class TestBuildCaption:

    @pytest.mark.asyncio
    async def test_template_by_default(self, mock_file_host):
        publisher = SocialPublisher(file_host=mock_file_host, use_ai_captions=False)

        caption = await publisher.build_caption("Lamp", "desc", "$5")

        assert caption == generate_instagram_caption("Lamp", "desc", "$5")

    @pytest.mark.asyncio
    async def test_ai_caption(self, mock_file_host):
        gemini = Mock(spec=GeminiService)
        gemini.generate_instagram_caption = AsyncMock(return_value="Glow up your desk ✨ #Lamp")
        publisher = SocialPublisher(file_host=mock_file_host, gemini_service=gemini, use_ai_captions=True)

        assert await publisher.build_caption("Lamp", None, "$5") == "Glow up your desk ✨ #Lamp"
        gemini.generate_instagram_caption.assert_awaited_once_with("Lamp", "", "$5")

    @pytest.mark.asyncio
    async def test_ai_failure_falls_back_to_template(self, mock_file_host):
        gemini = Mock(spec=GeminiService)
        gemini.generate_instagram_caption = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        publisher = SocialPublisher(file_host=mock_file_host, gemini_service=gemini, use_ai_captions=True)

        assert await publisher.build_caption("Lamp", "desc", "") == generate_instagram_caption("Lamp", "desc", "")


class TestPublish:

    @pytest.mark.asyncio
    async def test_publish(self, mock_file_host):
        handler, seen = graph_api()
        publisher = SocialPublisher(file_host=mock_file_host, http_client=mock_http_client(handler))

        post_id, post_url = await publisher.publish("/videos/final.mp4", "My caption", "ig-token", "1784")

        assert post_id == "post_42"
        assert post_url == "https://www.instagram.com/p/post_42/"
        assert seen["caption"] == "My caption"
        mock_file_host.upload_to_0x0.assert_awaited_once_with("/videos/final.mp4")

    @pytest.mark.asyncio
    async def test_missing_token(self, mock_file_host):
        publisher = SocialPublisher(file_host=mock_file_host)

        with pytest.raises(PipelineError) as exc_info:
            await publisher.publish("/videos/final.mp4", "caption", "", "1784")

        assert exc_info.value.code == ErrorCode.MISSING_CREDENTIALS
        mock_file_host.upload_to_0x0.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_failure(self, mock_file_host):
        mock_file_host.upload_to_0x0.side_effect = httpx.ConnectError("0x0.st unreachable")
        publisher = SocialPublisher(file_host=mock_file_host)

        with pytest.raises(PipelineError) as exc_info:
            await publisher.publish("/videos/final.mp4", "caption", "ig-token", "1784")

        assert exc_info.value.code == ErrorCode.SOCIAL_PUBLISH_FAILED
        assert exc_info.value.details["service"] == "instagram"
        assert exc_info.value.details["cause"] == "ConnectError"

    @pytest.mark.asyncio
    async def test_container_error(self, mock_file_host):
        handler, _ = graph_api(container_status="ERROR")
        publisher = SocialPublisher(file_host=mock_file_host, http_client=mock_http_client(handler))

        with pytest.raises(PipelineError) as exc_info:
            await publisher.publish("/videos/final.mp4", "caption", "ig-token", "1784")

        assert exc_info.value.code == ErrorCode.SOCIAL_PUBLISH_FAILED
        assert "ERROR" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_container_never_finishes(self, mock_file_host):
        handler, _ = graph_api(container_status="IN_PROGRESS")
        publisher = SocialPublisher(file_host=mock_file_host, http_client=mock_http_client(handler))

        with pytest.raises(PipelineError) as exc_info:
            await publisher.publish("/videos/final.mp4", "caption", "ig-token", "1784")

        assert exc_info.value.code == ErrorCode.VENDOR_TIMEOUT
