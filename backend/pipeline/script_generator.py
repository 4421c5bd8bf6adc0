"""
Script Generator with Gemini Integration

Turns product metadata into a short spoken marketing script and prepares the
text each avatar actually speaks.
"""

from typing import Optional

import structlog

from pipeline.error_handler import ErrorCode, PipelineError
from pipeline.templates import (
    AVATAR_SCRIPT_WRAPPER,
    DEFAULT_AVATAR_SCRIPT,
    WORDS_PER_SECOND,
)
from services.gemini_service import GeminiService


logger = structlog.get_logger(__name__)


def build_avatar_script(script: Optional[str]) -> str:
    """
    Text spoken by the presenter avatar.

    A generated script is wrapped with an intro and a call-to-action; an
    empty script is replaced by the default marketing pitch.
    """
    if script and script.strip():
        return AVATAR_SCRIPT_WRAPPER.format(script=script.strip())
    return DEFAULT_AVATAR_SCRIPT


def optimize_script_length(script: str, target_seconds: float) -> str:
    """
    Trim a script so it can be spoken in ``target_seconds``.

    Uses an average pace of 2.5 words per second. A truncated script that no
    longer ends with terminal punctuation gets an ellipsis.

    Example:
        >>> optimize_script_length("one two three four five six", 2)
        'one two three four five...'
    """
    words = script.split()
    max_words = int(target_seconds * WORDS_PER_SECOND)
    if max_words <= 0 or len(words) <= max_words:
        return script

    truncated = " ".join(words[:max_words])
    if not truncated.endswith((".", "!")):
        truncated += "..."
    return truncated


class ScriptGenerator:
    """
    Generates marketing scripts using GeminiService

    The Gemini client is created lazily so a missing key only fails the
    operations that need it.
    """

    def __init__(self, gemini_service: Optional[GeminiService] = None):
        """
        Initialize the script generator

        Args:
            gemini_service: Optional GeminiService instance (creates one on first use if None)
        """
        self._gemini_service = gemini_service

    @property
    def gemini(self) -> GeminiService:
        if self._gemini_service is None:
            self._gemini_service = GeminiService()
        return self._gemini_service

    async def generate_script(
        self,
        product_name: str = "",
        product_description: str = "",
        product_category: str = "",
        product_price: str = "",
    ) -> str:
        """
        Generate the 15-second marketing script for a product.

        Raises:
            PipelineError: MISSING_CREDENTIALS when no Gemini key is configured,
                SCRIPT_GENERATION_FAILED when Gemini fails
        """
        logger.info(
            "script_generation_started",
            product_name=product_name,
            has_description=bool(product_description),
            has_category=bool(product_category),
            has_price=bool(product_price),
        )

        try:
            script = await self.gemini.generate_marketing_script(
                product_name,
                product_description,
                product_category,
                product_price,
            )
        except PipelineError:
            raise
        except Exception as e:
            raise PipelineError(
                ErrorCode.SCRIPT_GENERATION_FAILED,
                f"Gemini API call failed: {e}",
                {"service": "gemini"},
            )

        if not script:
            raise PipelineError(
                ErrorCode.SCRIPT_GENERATION_FAILED,
                "Gemini returned an empty script",
                {"service": "gemini"},
            )

        logger.info("script_generation_completed", words=len(script.split()))
        return script


def create_script_generator(gemini_service: Optional[GeminiService] = None) -> ScriptGenerator:
    """Factory used by the API dependency layer"""
    return ScriptGenerator(gemini_service)
