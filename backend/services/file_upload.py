"""
File Upload Handling Service
Validates and stores the product image and presenter media of a submission.
Product images must be PNG, JPG or WebP. Presenter media may be an image or
a short MP4/MOV/AVI video.
"""

import io
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
import structlog
from PIL import Image

from config import settings
from pipeline.error_handler import ErrorCode, PipelineError

logger = structlog.get_logger(__name__)


# Presenter media with one of these extensions is treated as a video
VIDEO_EXTENSIONS = {".mp4", ".mov", ".avi"}
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp"}
SUPPORTED_IMAGE_FORMATS = {"PNG", "JPEG", "WEBP"}


def detect_media_type(filename: str) -> str:
    """Return "video" for video file extensions, "image" otherwise"""
    return "video" if Path(filename or "").suffix.lower() in VIDEO_EXTENSIONS else "image"


def convert_to_png(image_path: str) -> bytes:
    """
    Re-encode an image file as PNG.

    D-ID only accepts a narrow set of formats, so every presenter or product
    image is normalized before it is sent.
    """
    with Image.open(image_path) as img:
        if img.mode not in ("RGB", "RGBA", "L", "LA"):
            img = img.convert("RGBA")
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
    return buffer.getvalue()


class FileUploadService:
    """
    Service for validating and storing uploaded media.

    Example:
        >>> service = FileUploadService()
        >>> service.validate_product_image(image_bytes, "product.jpg")
        >>> path = await service.save(image_bytes, "product.jpg")
        >>> print(path)
        ./uploads/5f0c...-product.jpg
    """

    def __init__(self, upload_dir: Optional[str] = None):
        """
        Initialize file upload service.

        Args:
            upload_dir: Directory for uploaded files (default: UPLOAD_PATH)
        """
        self.upload_dir = Path(upload_dir or settings.UPLOAD_PATH)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def _validate_size(self, content: bytes, filename: str, max_size: int) -> None:
        if len(content) == 0:
            raise PipelineError(
                ErrorCode.INVALID_INPUT,
                f"File is empty: {filename}",
                {"filename": filename},
                user_message="Uploaded file is empty.",
            )
        if len(content) > max_size:
            size_mb = len(content) / (1024 * 1024)
            max_mb = max_size / (1024 * 1024)
            raise PipelineError(
                ErrorCode.FILE_TOO_LARGE,
                f"File size ({size_mb:.2f}MB) exceeds maximum allowed size ({max_mb:.2f}MB)",
                {"filename": filename, "size": len(content), "max_size": max_size},
                user_message=f"File must not exceed {max_mb:.0f}MB.",
            )

    def _validate_image(self, content: bytes, filename: str) -> str:
        file_ext = Path(filename).suffix.lower()
        if file_ext not in IMAGE_EXTENSIONS:
            raise PipelineError(
                ErrorCode.UNSUPPORTED_FORMAT,
                f"Unsupported file extension: {file_ext}",
                {"filename": filename},
            )

        try:
            with Image.open(io.BytesIO(content)) as img:
                img_format = img.format
                img.verify()
        except Exception as e:
            raise PipelineError(
                ErrorCode.UNSUPPORTED_FORMAT,
                f"Invalid or corrupted image file: {e}",
                {"filename": filename},
            )

        if img_format not in SUPPORTED_IMAGE_FORMATS:
            raise PipelineError(
                ErrorCode.UNSUPPORTED_FORMAT,
                f"Unsupported image format: {img_format}",
                {"filename": filename},
            )
        return img_format

    def validate_product_image(self, content: bytes, filename: str) -> None:
        """
        Validate a product image upload.

        Raises:
            PipelineError: FILE_TOO_LARGE, UNSUPPORTED_FORMAT or INVALID_INPUT
        """
        self._validate_size(content, filename, settings.MAX_PRODUCT_IMAGE_SIZE)
        img_format = self._validate_image(content, filename)
        logger.info("product_image_validated", filename=filename, size=len(content), format=img_format)

    def validate_person_media(self, content: bytes, filename: str) -> str:
        """
        Validate a presenter photo or video upload.

        Returns:
            The media type, "image" or "video"
        """
        self._validate_size(content, filename, settings.MAX_PERSON_MEDIA_SIZE)
        media_type = detect_media_type(filename)
        if media_type == "image":
            self._validate_image(content, filename)
        logger.info("person_media_validated", filename=filename, size=len(content), media_type=media_type)
        return media_type

    async def save(self, content: bytes, filename: str) -> str:
        """
        Save an upload under a unique name.

        Returns:
            Path of the stored file
        """
        safe_name = self._sanitize_filename(filename)
        file_path = self.upload_dir / f"{uuid.uuid4()}-{safe_name}"

        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            raise PipelineError(
                ErrorCode.STORAGE_ERROR,
                f"Failed to save upload {filename}: {e}",
                {"filename": filename},
            )

        logger.info("upload_saved", path=str(file_path), size=len(content))
        return str(file_path)

    @staticmethod
    def _sanitize_filename(filename: str) -> str:
        """Keep only the base name with safe characters"""
        name = Path(filename or "upload").name
        safe = "".join(c if c.isalnum() or c in "._-" else "_" for c in name)
        return safe or "upload"
