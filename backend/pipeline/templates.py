"""
Static copy used across the pipeline.

Scripts spoken by avatars, RunwayML motion prompts, fallback website features
and the building blocks of Instagram captions.
"""

from typing import Dict, List


# Product video styles accepted by the generate-video endpoint
PRODUCT_VIDEO_STYLES = ("rotation", "zoom", "pan", "reveal", "auto")
DEFAULT_PRODUCT_VIDEO_STYLE = "auto"


# Spoken text for the presenter avatar
AVATAR_SCRIPT_WRAPPER = (
    "Hello! I'm excited to share something amazing with you today. {script} "
    "This product is designed to make your life easier and better. "
    "Don't miss out on this incredible opportunity - get yours today and experience the difference!"
)

DEFAULT_AVATAR_SCRIPT = (
    "Hello! Welcome to our amazing product showcase. This innovative solution is designed "
    "specifically for you, combining quality, style, and functionality. It's perfect for anyone "
    "looking to upgrade their experience. Join thousands of satisfied customers who have already "
    "made the smart choice. Order now and transform the way you live. "
    "Don't wait - this is your chance to experience excellence!"
)


# RunwayML image_to_video prompts by style
PRODUCT_VIDEO_PROMPTS: Dict[str, str] = {
    "rotation": (
        "Professional product showcase with smooth 360-degree rotation, studio lighting, "
        "elegant spin, premium commercial feel, 4K quality, product centered"
    ),
    "zoom": (
        "Professional product showcase with smooth zoom-in effect, starting wide and focusing "
        "on product details, studio lighting, premium commercial feel, 4K quality"
    ),
    "pan": (
        "Professional product showcase with smooth camera pan movement, exploring product from "
        "different angles, studio lighting, premium commercial feel, 4K quality"
    ),
    "reveal": (
        "Professional product reveal with dramatic lighting, product emerging from shadows, "
        "cinematic reveal, premium commercial feel, 4K quality"
    ),
    "auto": (
        "Professional product showcase with smooth camera movement, elegant rotation, studio "
        "lighting, premium commercial feel, 4K quality, product centered"
    ),
}


# D-ID product presentation scripts by style (product image used as the talking source)
PRODUCT_VIDEO_SCRIPTS: Dict[str, str] = {
    "rotation": (
        "Welcome to our product showcase! This amazing product features a stunning design with "
        "premium quality. Watch as we explore its elegant features and innovative design. Perfect "
        "for your needs, this product combines style and functionality in one beautiful package."
    ),
    "zoom": (
        "Take a closer look at this incredible product! Every detail has been carefully crafted "
        "to perfection. From its sleek exterior to its innovative features, this product is "
        "designed to impress. Experience the quality and craftsmanship that sets it apart."
    ),
    "pan": (
        "Let me show you this remarkable product from every angle. Notice the attention to detail "
        "and premium materials. This product represents the perfect blend of form and function, "
        "designed to exceed your expectations."
    ),
    "reveal": (
        "Prepare to be amazed by this extraordinary product! With cutting-edge technology and "
        "elegant design, this product is truly something special. Discover why it's the perfect "
        "choice for you."
    ),
    "auto": (
        "Introducing our premium product! This exceptional item combines innovative design with "
        "outstanding quality. Perfect for those who demand the best, this product delivers on "
        "every promise. Experience the difference that quality makes."
    ),
}


def product_video_prompt(style: str) -> str:
    """RunwayML prompt for a style; unknown styles use the rotation prompt"""
    return PRODUCT_VIDEO_PROMPTS.get(style, PRODUCT_VIDEO_PROMPTS["rotation"])


def product_video_script(style: str) -> str:
    """D-ID product script for a style; unknown styles use the auto script"""
    return PRODUCT_VIDEO_SCRIPTS.get(style, PRODUCT_VIDEO_SCRIPTS["auto"])


# Website feature cards
FEATURE_DEFAULT_ICON = "✨"
FEATURE_DEFAULT_TITLE = "Feature"
FEATURE_DEFAULT_DESCRIPTION = "Experience the difference."
FEATURE_COUNT = 4

DEFAULT_FEATURES: List[Dict[str, str]] = [
    {
        "icon": "🚀",
        "title": "Lightning Fast",
        "description": "Experience unparalleled speed and efficiency that transforms your workflow.",
    },
    {
        "icon": "💎",
        "title": "Premium Quality",
        "description": "Built with the finest materials and cutting-edge technology.",
    },
    {
        "icon": "🔒",
        "title": "Secure & Reliable",
        "description": "Your data and privacy are our top priorities.",
    },
    {
        "icon": "🎯",
        "title": "Easy to Use",
        "description": "Intuitive design that anyone can master in minutes.",
    },
]


def default_features() -> List[Dict[str, str]]:
    return [dict(feature) for feature in DEFAULT_FEATURES]


# Instagram captions
CAPTION_HOOKS = [
    "🔥 You NEED to see this!",
    "✨ Game changer alert!",
    "💎 Obsessed with this!",
    "🚀 This is EVERYTHING!",
    "⚡ Wait for it...",
]

CAPTION_HASHTAGS = [
    "#ProductLaunch",
    "#NewProduct",
    "#MustHave",
    "#ShopNow",
    "#Innovation",
    "#TechTok",
    "#ProductReview",
    "#Unboxing",
    "#DealOfTheDay",
    "#TrendingNow",
]

CAPTION_HASHTAG_COUNT = 8
CAPTION_DESCRIPTION_LIMIT = 100
CAPTION_CALL_TO_ACTION = "👉 Link in bio to learn more!"


# Average speaking pace used to fit a script into a video length
WORDS_PER_SECOND = 2.5
