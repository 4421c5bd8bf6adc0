"""
Website Builder - static product landing pages

Renders index.html, styles.css and script.js for a project into its own
directory under WEBSITE_PATH. The page embeds the uploaded product image and
the generated video through the app's static mounts.
"""

import html
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import aiofiles
import structlog

from config import settings
from models import Project
from pipeline.error_handler import ErrorCode, stage_error
from pipeline.templates import default_features
from pipeline.website_templates import FEATURE_COLORS, TEMPLATES
from services.gemini_service import GeminiService


logger = structlog.get_logger(__name__)


DEFAULT_PRODUCT_NAME = "Amazing Product"
DEFAULT_PRODUCT_DESCRIPTION = "Transform your experience with our innovative solution"

UPLOADS_URL_PREFIX = "/static/uploads"
VIDEOS_URL_PREFIX = "/static/generated/videos"
WEBSITES_URL_PREFIX = "/static/generated/websites"


def website_url_for(website_path: str) -> str:
    """Public URL of a generated site's index page"""
    return f"{WEBSITES_URL_PREFIX}/{Path(website_path).name}/index.html"


def static_url(prefix: str, file_path: Optional[str]) -> str:
    if not file_path:
        return ""
    return f"{prefix}/{Path(file_path).name}"


def has_price(price: Optional[str]) -> bool:
    return bool(price) and price != "$0"


def render_features(features: List[Dict[str, str]], template_name: str) -> str:
    card = TEMPLATES[template_name]["feature_card"]
    cards = []
    for index, feature in enumerate(features):
        cards.append(card.format(
            color=FEATURE_COLORS[index % len(FEATURE_COLORS)],
            icon=html.escape(feature.get("icon", "")),
            title=html.escape(feature.get("title", "")),
            description=html.escape(feature.get("description", "")),
        ))
    return "\n                ".join(cards)


def render_index(
    template_name: str,
    name: str,
    description: str,
    price: Optional[str],
    image_url: str,
    video_url: str,
    features: List[Dict[str, str]],
) -> str:
    """
    Render the index page.

    Name, description and price are escaped here; callers pass raw values.
    """
    parts = TEMPLATES[template_name]
    safe_name = html.escape(name)
    safe_image_url = html.escape(image_url)

    price_block = ""
    if has_price(price):
        price_block = parts["price_block"].format(price=html.escape(price))

    if video_url:
        video_html = parts["video_block"].format(
            image_url=safe_image_url,
            video_url=html.escape(video_url),
        )
    else:
        video_html = parts["video_placeholder"]

    return parts["index"].format(
        name=safe_name,
        initial=safe_name[:1].upper(),
        description=html.escape(description),
        image_url=safe_image_url,
        price_block=price_block,
        features_html=render_features(features, template_name),
        video_html=video_html,
        year=datetime.utcnow().year,
    )


class WebsiteBuilder:
    """
    Build the landing page for a project.

    Feature cards come from Gemini when it is configured; otherwise, or when
    the call fails, the four default features are used.

    Example:
        >>> builder = WebsiteBuilder()
        >>> website_path = await builder.build(project)
        >>> website_url_for(website_path)
        '/static/generated/websites/<uuid>/index.html'
    """

    def __init__(
        self,
        output_dir: Optional[str] = None,
        use_modern_style: Optional[bool] = None,
        gemini_service: Optional[GeminiService] = None,
    ):
        self.output_dir = Path(output_dir or settings.WEBSITE_PATH)
        self.use_modern_style = settings.USE_V0_STYLE if use_modern_style is None else use_modern_style
        self._gemini = gemini_service

    @property
    def template_name(self) -> str:
        return "modern" if self.use_modern_style else "classic"

    async def generate_features(
        self,
        name: str,
        description: str,
        category: str = "",
        price: str = "",
    ) -> List[Dict[str, str]]:
        try:
            if self._gemini is None:
                self._gemini = GeminiService()
            return await self._gemini.generate_website_features(name, description, category, price)
        except Exception as e:
            logger.warning("website_features_fallback", error=str(e), error_type=type(e).__name__)
            return default_features()

    async def build(self, project: Project) -> str:
        """
        Render and write the site.

        Returns:
            Path of the new website directory

        Raises:
            PipelineError: WEBSITE_GENERATION_FAILED when the files cannot be written
        """
        name = project.product_name or DEFAULT_PRODUCT_NAME
        description = project.product_description or DEFAULT_PRODUCT_DESCRIPTION
        log = logger.bind(project_id=project.id, template=self.template_name)
        log.info("website_generation_started")

        features = await self.generate_features(
            name,
            description,
            project.product_category or "",
            project.product_price or "",
        )

        index_html = render_index(
            self.template_name,
            name=name,
            description=description,
            price=project.product_price,
            image_url=static_url(UPLOADS_URL_PREFIX, project.product_image_path),
            video_url=static_url(VIDEOS_URL_PREFIX, project.generated_video_path),
            features=features,
        )
        parts = TEMPLATES[self.template_name]

        website_dir = self.output_dir / str(uuid.uuid4())
        try:
            website_dir.mkdir(parents=True, exist_ok=True)
            for filename, content in (
                ("index.html", index_html),
                ("styles.css", parts["styles"]),
                ("script.js", parts["script"]),
            ):
                async with aiofiles.open(website_dir / filename, "w", encoding="utf-8") as f:
                    await f.write(content)
        except OSError as e:
            log.error("website_write_failed", error=str(e))
            raise stage_error(ErrorCode.WEBSITE_GENERATION_FAILED, e, website_path=str(website_dir))

        log.info("website_generation_completed", website_path=str(website_dir))
        return str(website_dir)


def create_website_builder() -> WebsiteBuilder:
    """Factory used by the API dependency layer"""
    return WebsiteBuilder()
