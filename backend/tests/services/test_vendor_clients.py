"""
Wire-level tests for the vendor API clients using httpx.MockTransport.
"""

import base64

import httpx
import pytest
from PIL import Image

from pipeline.error_handler import ErrorCode, PipelineError, VendorAPIError
from services.did_client import DIDClient
from services.instagram_client import InstagramClient, post_url_for
from services.polling import TaskPending, VendorTaskFailed
from services.runway_client import RUNWAY_MODEL, RunwayClient, encode_data_uri, image_mime_type
from services.shotstack_client import (
    LAYOUT_AVATAR_MAIN,
    LAYOUT_PRODUCT_MAIN,
    ShotstackClient,
    build_timeline,
)
from services.synthesia_client import SynthesiaClient
from services.vendor_client import mask_secret
from tests.utils import mock_http_client, request_json


class TestCredentials:
    """Every client refuses to start without its key."""

    @pytest.mark.parametrize("client_cls,env", [
        (DIDClient, "DID_API_KEY"),
        (RunwayClient, "RUNWAYML_API_KEY"),
        (ShotstackClient, "SHOTSTACK_API_KEY"),
        (SynthesiaClient, "SYNTHESIA_API_KEY"),
    ])
    def test_missing_key(self, client_cls, env):
        with pytest.raises(PipelineError) as exc_info:
            client_cls()
        assert exc_info.value.code == ErrorCode.MISSING_CREDENTIALS
        assert exc_info.value.get_user_friendly_message() == f"{env} not configured."

    def test_mask_secret(self):
        assert mask_secret("abcdefghijklmnop") == "abcd...mnop"
        assert "secret" not in mask_secret("secret")


class TestDIDClient:
    """Test the D-ID images/talks protocol."""

    @pytest.mark.asyncio
    async def test_upload_image_sends_png(self, tmp_path):
        jpg = tmp_path / "presenter.jpg"
        Image.new("RGB", (8, 8), (0, 0, 255)).save(jpg, format="JPEG")
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = request.content
            return httpx.Response(201, json={"url": "s3://d-id/presenter.png"})

        client = DIDClient(api_key="did-key", http_client=mock_http_client(handler))
        url = await client.upload_image(str(jpg))

        assert url == "s3://d-id/presenter.png"
        assert seen["path"] == "/images"
        assert seen["auth"] == "Basic did-key"
        assert b"presenter.png" in seen["body"]
        assert b"\x89PNG" in seen["body"]

    @pytest.mark.asyncio
    async def test_create_talk_payload(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request_json(request))
            return httpx.Response(201, json={"id": "tlk_123"})

        client = DIDClient(api_key="did-key", http_client=mock_http_client(handler))
        talk_id = await client.create_talk("https://img/p.png", "Hello there")

        assert talk_id == "tlk_123"
        assert seen["source_url"] == "https://img/p.png"
        assert seen["script"]["input"] == "Hello there"
        assert seen["script"]["provider"] == {"type": "microsoft", "voice_id": "en-US-JennyNeural"}
        assert seen["config"] == {"fluent": True, "pad_audio": 0, "stitch": True}

    @pytest.mark.asyncio
    async def test_create_talk_error_status(self):
        client = DIDClient(
            api_key="did-key",
            http_client=mock_http_client(lambda request: httpx.Response(402, text="insufficient credits")),
        )
        with pytest.raises(VendorAPIError) as exc_info:
            await client.create_talk("https://img/p.png", "Hi")
        assert exc_info.value.status_code == 402

    @pytest.mark.asyncio
    async def test_wait_for_talk(self):
        responses = iter([
            httpx.Response(200, json={"status": "created"}),
            httpx.Response(500, text="flaky"),
            httpx.Response(200, json={"status": "done", "result_url": "https://d-id/result.mp4"}),
        ])
        client = DIDClient(api_key="did-key", http_client=mock_http_client(lambda request: next(responses)))

        assert await client.wait_for_talk("tlk_123") == "https://d-id/result.mp4"

    @pytest.mark.asyncio
    async def test_talk_error_is_terminal(self):
        client = DIDClient(
            api_key="did-key",
            http_client=mock_http_client(
                lambda request: httpx.Response(200, json={"status": "error", "error": {"message": "face not detected"}})
            ),
        )
        with pytest.raises(VendorTaskFailed) as exc_info:
            await client.get_talk_result("tlk_123")
        assert "face not detected" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_missing_status_is_pending(self):
        client = DIDClient(
            api_key="did-key",
            http_client=mock_http_client(lambda request: httpx.Response(200, json={"id": "tlk_123"})),
        )
        with pytest.raises(TaskPending):
            await client.get_talk_result("tlk_123")


class TestRunwayClient:
    """Test RunwayML image_to_video."""

    def test_image_mime_type(self):
        assert image_mime_type("a.PNG") == "image/png"
        assert image_mime_type("a.webp") == "image/webp"
        assert image_mime_type("a.bmp") == "image/jpeg"

    @pytest.mark.asyncio
    async def test_encode_data_uri(self, png_file):
        uri = await encode_data_uri(png_file)
        header, encoded = uri.split(",", 1)
        assert header == "data:image/png;base64"
        assert base64.b64decode(encoded).startswith(b"\x89PNG")

    @pytest.mark.asyncio
    async def test_create_image_to_video(self, png_file):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["headers"] = request.headers
            seen["body"] = request_json(request)
            return httpx.Response(200, json={"id": "task_9"})

        client = RunwayClient(api_key="rw-key", http_client=mock_http_client(handler))
        task_id = await client.create_image_to_video(png_file, "smooth rotation")

        assert task_id == "task_9"
        assert seen["path"] == "/v1/image_to_video"
        assert seen["headers"]["Authorization"] == "Bearer rw-key"
        assert seen["headers"]["X-Runway-Version"] == "2024-11-06"
        assert seen["body"]["model"] == RUNWAY_MODEL
        assert seen["body"]["duration"] == 5
        assert seen["body"]["ratio"] == "1280:768"
        assert seen["body"]["promptText"] == "smooth rotation"
        assert seen["body"]["promptImage"].startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_task_results(self):
        responses = iter([
            httpx.Response(200, json={"status": "RUNNING"}),
            httpx.Response(200, json={"status": "SUCCEEDED", "output": ["https://runway/out.mp4"]}),
        ])
        client = RunwayClient(api_key="rw-key", http_client=mock_http_client(lambda request: next(responses)))

        assert await client.wait_for_task("task_9") == "https://runway/out.mp4"

    @pytest.mark.asyncio
    async def test_failed_task(self):
        client = RunwayClient(
            api_key="rw-key",
            http_client=mock_http_client(
                lambda request: httpx.Response(200, json={"status": "FAILED", "failure": "content moderation"})
            ),
        )
        with pytest.raises(VendorTaskFailed) as exc_info:
            await client.wait_for_task("task_9")
        assert "content moderation" in exc_info.value.message


class TestShotstack:
    """Test timeline building and render polling."""

    def test_product_main_layout(self):
        edit = build_timeline("https://files/product.mp4", "https://files/avatar.mp4", LAYOUT_PRODUCT_MAIN)
        overlay_track, main_track = edit["timeline"]["tracks"]

        assert main_track["clips"][0]["asset"]["src"] == "https://files/product.mp4"
        assert main_track["clips"][0]["fit"] == "cover"
        overlay = overlay_track["clips"][0]
        assert overlay["asset"]["src"] == "https://files/avatar.mp4"
        assert overlay["position"] == "bottomRight"
        assert overlay["scale"] == 0.25
        assert overlay["length"] == 15
        assert edit["output"] == {"format": "mp4", "resolution": "hd", "fps": 30}

    def test_avatar_main_layout(self):
        edit = build_timeline("https://files/product.mp4", "https://files/avatar.mp4", LAYOUT_AVATAR_MAIN)
        overlay_track, main_track = edit["timeline"]["tracks"]

        assert main_track["clips"][0]["asset"]["src"] == "https://files/avatar.mp4"
        assert overlay_track["clips"][0]["asset"]["src"] == "https://files/product.mp4"
        assert overlay_track["clips"][0]["scale"] == 0.3

    @pytest.mark.asyncio
    async def test_submit_and_wait(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["x-api-key"] == "ss-key"
            if request.method == "POST":
                return httpx.Response(201, json={"success": True, "response": {"id": "render_1"}})
            return httpx.Response(200, json={"response": {"status": "done", "url": "https://shotstack/final.mp4"}})

        client = ShotstackClient(api_key="ss-key", http_client=mock_http_client(handler))
        render_id = await client.submit_render(build_timeline("a", "b"))

        assert render_id == "render_1"
        assert await client.wait_for_render(render_id) == "https://shotstack/final.mp4"

    @pytest.mark.asyncio
    async def test_submit_without_id(self):
        client = ShotstackClient(
            api_key="ss-key",
            http_client=mock_http_client(lambda request: httpx.Response(201, json={"success": False})),
        )
        with pytest.raises(VendorAPIError):
            await client.submit_render(build_timeline("a", "b"))

    @pytest.mark.asyncio
    async def test_failed_render(self):
        client = ShotstackClient(
            api_key="ss-key",
            http_client=mock_http_client(
                lambda request: httpx.Response(200, json={"response": {"status": "failed", "error": "bad src"}})
            ),
        )
        with pytest.raises(VendorTaskFailed):
            await client.get_render_result("render_1")


class TestSynthesiaClient:
    """Test Synthesia video creation."""

    @pytest.mark.asyncio
    async def test_create_and_wait(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["Authorization"] == "syn-key"
            if request.method == "POST":
                body = request_json(request)
                assert body["input"][0]["scriptText"] == "Hello"
                assert body["input"][0]["avatar"] == "anna_costume1_cameraA"
                return httpx.Response(202, json={"id": "vid_1"})
            return httpx.Response(200, json={"status": "complete", "download": "https://synthesia/vid.mp4"})

        client = SynthesiaClient(api_key="syn-key", http_client=mock_http_client(handler))
        video_id = await client.create_video("Hello")

        assert video_id == "vid_1"
        assert await client.wait_for_video(video_id) == "https://synthesia/vid.mp4"


class TestInstagramClient:
    """Test the container-create / poll / publish protocol."""

    @pytest.mark.asyncio
    async def test_full_publish(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append((request.method, request.url.path))
            if request.url.path == "/v18.0/1784/media":
                body = request_json(request)
                assert body["media_type"] == "REELS"
                assert body["video_url"] == "https://0x0.st/abc.mp4"
                assert body["access_token"] == "ig-token"
                return httpx.Response(200, json={"id": "container_1"})
            if request.url.path == "/v18.0/container_1":
                assert request.url.params["fields"] == "status_code"
                return httpx.Response(200, json={"status_code": "FINISHED"})
            if request.url.path == "/v18.0/1784/media_publish":
                assert request_json(request)["creation_id"] == "container_1"
                return httpx.Response(200, json={"id": "post_42"})
            return httpx.Response(404)

        client = InstagramClient("ig-token", "1784", http_client=mock_http_client(handler))
        container_id = await client.create_container("https://0x0.st/abc.mp4", "caption")
        await client.wait_for_container(container_id)
        post_id, post_url = await client.publish_container(container_id)

        assert post_id == "post_42"
        assert post_url == post_url_for("post_42") == "https://www.instagram.com/p/post_42/"
        assert [method for method, _ in calls] == ["POST", "GET", "POST"]

    @pytest.mark.asyncio
    async def test_container_error(self):
        client = InstagramClient(
            "ig-token",
            "1784",
            http_client=mock_http_client(lambda request: httpx.Response(200, json={"status_code": "ERROR"})),
        )
        with pytest.raises(VendorTaskFailed):
            await client.wait_for_container("container_1")

    def test_missing_token(self):
        with pytest.raises(PipelineError) as exc_info:
            InstagramClient("", "1784")
        assert exc_info.value.code == ErrorCode.MISSING_CREDENTIALS

    @pytest.mark.asyncio
    async def test_publish_stops_on_container_error(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append((request.method, request.url.path))
            if request.method == "GET":
                return httpx.Response(200, json={"status_code": "ERROR"})
            return httpx.Response(200, json={"id": "container_1"})

        client = InstagramClient("ig-token", "1784", http_client=mock_http_client(handler))
        container_id = await client.create_container("https://0x0.st/abc.mp4", "caption")

        with pytest.raises(VendorTaskFailed):
            await client.wait_for_container(container_id)
        assert calls == [("POST", "/v18.0/1784/media"), ("GET", "/v18.0/container_1")]
