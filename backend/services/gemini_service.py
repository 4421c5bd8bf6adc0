"""
Google Gemini text generation service.

Generates the marketing script for a product, the feature cards shown on the
product website, and optional AI-written Instagram captions.
"""

import json
from typing import Dict, List, Optional

import structlog
from google import genai
from google.genai import types

from config import settings
from pipeline.error_handler import ErrorCode, PipelineError
from pipeline.templates import (
    FEATURE_COUNT,
    FEATURE_DEFAULT_DESCRIPTION,
    FEATURE_DEFAULT_ICON,
    FEATURE_DEFAULT_TITLE,
    default_features,
)


logger = structlog.get_logger(__name__)


SAFETY_CATEGORIES = [
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
]


MARKETING_SCRIPT_PROMPT = """You are an expert marketing copywriter specializing in short-form video scripts for Instagram Reels and TikTok.

Create a compelling 15-second marketing script (approximately 35-40 words) for the following product:

{product_details}
REQUIREMENTS:
1. Exactly 35-40 words (for 15-second video)
2. Start with an attention-grabbing hook (first 3-5 words)
3. Mention the product name
4. Highlight 1-2 key features or benefits
5. Include the price if provided
6. End with a strong call-to-action
7. Use energetic, enthusiastic tone
8. Perfect for short-form video (Instagram Reels/TikTok)
9. Don't use quotation marks in the script
10. Make it conversational and natural

OUTPUT FORMAT:
Return ONLY the script text, no additional commentary, no quotation marks, no explanations.

Example output:
Wait for it! The iPhone 15 Pro features the powerful A17 chip, stunning titanium design, and pro camera system. Perfect for creators and professionals. Only $999! Get yours today and experience the future!

Now generate the script:"""


WEBSITE_FEATURES_PROMPT = """Generate 4 product features for: {name} ({description}). Category: {category}, Price: {price}

Return ONLY valid JSON:
{{
  "features": [
    {{"icon": "emoji", "title": "2-4 words", "description": "15-25 words benefit-focused"}},
    {{"icon": "emoji", "title": "2-4 words", "description": "15-25 words benefit-focused"}},
    {{"icon": "emoji", "title": "2-4 words", "description": "15-25 words benefit-focused"}},
    {{"icon": "emoji", "title": "2-4 words", "description": "15-25 words benefit-focused"}}
  ]
}}

Make features product-specific, use varied emojis (🚀💎🔒⚡🎯✨🌟💪🎨🔥), compelling titles, benefit-focused descriptions."""


INSTAGRAM_CAPTION_PROMPT = """Create an engaging Instagram Reels caption for:

Product: {name}
Description: {description}
Price: {price}

Requirements:
- Start with attention-grabbing emoji and hook
- Include product name
- Brief description (2-3 lines)
- Price mention
- 8-10 relevant hashtags
- Call-to-action at the end
- Use emojis strategically
- Perfect for Instagram Reels

Return ONLY the caption:"""


def build_script_prompt(
    product_name: str = "",
    product_description: str = "",
    product_category: str = "",
    product_price: str = "",
) -> str:
    """Build the marketing script prompt, listing only the fields that are set"""
    details = ""
    if product_name:
        details += f"Product Name: {product_name}\n"
    if product_description:
        details += f"Description: {product_description}\n"
    if product_category:
        details += f"Category: {product_category}\n"
    if product_price:
        details += f"Price: {product_price}\n"
    return MARKETING_SCRIPT_PROMPT.format(product_details=details)


def clean_script(text: str) -> str:
    """Trim whitespace and surrounding quotation marks"""
    return text.strip().strip('"')


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ``` or ```json markdown fence"""
    text = text.strip()
    if text.startswith("```json"):
        text = text[len("```json"):]
    elif text.startswith("```"):
        text = text[len("```"):]
    else:
        return text
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_features(text: str) -> List[Dict[str, str]]:
    """
    Parse the features JSON returned by Gemini.

    Missing fields fall back to defaults, the list is padded with the default
    features and truncated to exactly four entries.

    Raises:
        ValueError: If the text is not JSON or has no "features" list
    """
    try:
        result = json.loads(text)
    except ValueError:
        result = json.loads(strip_code_fences(text))

    raw_features = result.get("features") if isinstance(result, dict) else None
    if not isinstance(raw_features, list):
        raise ValueError("invalid features format in response")

    features = []
    for raw in raw_features[:FEATURE_COUNT]:
        if not isinstance(raw, dict):
            continue
        features.append({
            "icon": raw.get("icon") or FEATURE_DEFAULT_ICON,
            "title": raw.get("title") or FEATURE_DEFAULT_TITLE,
            "description": raw.get("description") or FEATURE_DEFAULT_DESCRIPTION,
        })

    defaults = default_features()
    while len(features) < FEATURE_COUNT:
        features.append(defaults[len(features)])

    return features[:FEATURE_COUNT]


class GeminiService:
    """
    Thin wrapper around the google-genai async client.

    Usage:
        service = GeminiService()
        script = await service.generate_marketing_script("EcoBottle", "Insulated bottle", "", "$29")
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        if not self.api_key:
            raise PipelineError(
                ErrorCode.MISSING_CREDENTIALS,
                "GOOGLE_GEMINI_API_KEY not configured",
                {"service": "gemini"},
                user_message="GOOGLE_GEMINI_API_KEY not configured.",
            )
        self.model = model or settings.GEMINI_MODEL
        self.client = genai.Client(api_key=self.api_key)
        self.logger = logger.bind(service="gemini", model=self.model)

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=0.7,
            top_k=40,
            top_p=0.95,
            max_output_tokens=2048,
            safety_settings=[
                types.SafetySetting(
                    category=category,
                    threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
                )
                for category in SAFETY_CATEGORIES
            ],
            http_options=types.HttpOptions(timeout=settings.GEMINI_TIMEOUT * 1000),
        )

    async def generate_text(self, prompt: str) -> str:
        """
        Run a single prompt.

        Raises:
            PipelineError: SCRIPT_GENERATION_FAILED when blocked or empty
        """
        self.logger.info("gemini_request_started", prompt_chars=len(prompt))

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self._generation_config(),
            )
        except Exception as e:
            self.logger.error("gemini_request_failed", error=str(e), error_type=type(e).__name__)
            raise PipelineError(
                ErrorCode.SCRIPT_GENERATION_FAILED,
                f"Gemini API call failed: {e}",
                {"service": "gemini"},
            )

        candidates = response.candidates or []
        if not candidates:
            raise PipelineError(
                ErrorCode.SCRIPT_GENERATION_FAILED,
                "no candidates in Gemini response",
                {"service": "gemini"},
            )

        finish_reason = candidates[0].finish_reason
        if finish_reason == types.FinishReason.SAFETY:
            raise PipelineError(
                ErrorCode.SCRIPT_GENERATION_FAILED,
                "content blocked by safety filters",
                {"service": "gemini", "finish_reason": "SAFETY"},
            )
        if finish_reason == types.FinishReason.MAX_TOKENS:
            self.logger.warning("gemini_response_truncated")

        text = response.text
        if not text:
            raise PipelineError(
                ErrorCode.SCRIPT_GENERATION_FAILED,
                "empty Gemini response",
                {"service": "gemini"},
            )

        self.logger.info("gemini_request_completed", response_chars=len(text))
        return text

    async def generate_marketing_script(
        self,
        product_name: str = "",
        product_description: str = "",
        product_category: str = "",
        product_price: str = "",
    ) -> str:
        prompt = build_script_prompt(product_name, product_description, product_category, product_price)
        script = clean_script(await self.generate_text(prompt))
        self.logger.info("marketing_script_generated", words=len(script.split()))
        return script

    async def generate_website_features(
        self,
        product_name: str,
        product_description: str,
        product_category: str = "",
        product_price: str = "",
    ) -> List[Dict[str, str]]:
        """
        Generate four feature cards for the product website.

        Raises:
            PipelineError: When Gemini fails
            ValueError: When the response cannot be parsed
        """
        prompt = WEBSITE_FEATURES_PROMPT.format(
            name=product_name,
            description=product_description,
            category=product_category,
            price=product_price,
        )
        features = parse_features(await self.generate_text(prompt))
        self.logger.info("website_features_generated", count=len(features))
        return features

    async def generate_instagram_caption(
        self,
        product_name: str,
        product_description: str,
        product_price: str,
    ) -> str:
        prompt = INSTAGRAM_CAPTION_PROMPT.format(
            name=product_name,
            description=product_description,
            price=product_price,
        )
        return (await self.generate_text(prompt)).strip()
