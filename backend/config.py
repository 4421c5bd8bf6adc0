"""
Configuration management for the FastAPI backend
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./data/app.db")

    # Local storage
    UPLOAD_PATH: str = os.getenv("UPLOAD_PATH", "./uploads")
    GENERATED_VIDEO_PATH: str = os.getenv("GENERATED_VIDEO_PATH", "./generated/videos")
    WEBSITE_PATH: str = os.getenv("WEBSITE_PATH", "./generated/websites")

    # CORS
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Application
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", os.getenv("PORT", "8080")))

    # Pipeline selection
    # Options for AI_PROVIDER: "mock", "did", "synthesia"
    AI_PROVIDER: str = os.getenv("AI_PROVIDER", "mock").lower()
    USE_FULL_AI_PIPELINE: bool = os.getenv("USE_FULL_AI_PIPELINE", "false").lower() == "true"
    # Options for PRODUCT_VIDEO_PROVIDER: "runwayml", "did"
    PRODUCT_VIDEO_PROVIDER: str = os.getenv("PRODUCT_VIDEO_PROVIDER", "runwayml").lower()
    USE_V0_STYLE: bool = os.getenv("USE_V0_STYLE", "true").lower() == "true"
    USE_AI_CAPTIONS: bool = os.getenv("USE_AI_CAPTIONS", "false").lower() == "true"

    # Asset Retention Policy
    KEEP_INTERMEDIATE_ASSETS: bool = os.getenv("KEEP_INTERMEDIATE_ASSETS", "true").lower() == "true"

    # API Keys
    GOOGLE_GEMINI_API_KEY: str = os.getenv("GOOGLE_GEMINI_API_KEY", "")
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    DID_API_KEY: str = os.getenv("DID_API_KEY", "")
    RUNWAYML_API_KEY: str = os.getenv("RUNWAYML_API_KEY", "")
    SHOTSTACK_API_KEY: str = os.getenv("SHOTSTACK_API_KEY", "")
    SYNTHESIA_API_KEY: str = os.getenv("SYNTHESIA_API_KEY", "")
    AI_API_KEY: str = os.getenv("AI_API_KEY", "")  # Legacy naming for Synthesia
    INSTAGRAM_ACCESS_TOKEN: str = os.getenv("INSTAGRAM_ACCESS_TOKEN", "")
    INSTAGRAM_USER_ID: str = os.getenv("INSTAGRAM_USER_ID", "")

    # Gemini settings
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_TIMEOUT: int = int(os.getenv("GEMINI_TIMEOUT", "30"))

    # Vendor endpoints
    DID_BASE_URL: str = os.getenv("DID_BASE_URL", "https://api.d-id.com")
    DID_DEFAULT_PRESENTER_URL: str = os.getenv(
        "DID_DEFAULT_PRESENTER_URL",
        "https://create-images-results.d-id.com/api_docs/assets/noelle.jpeg",
    )
    DID_VOICE_ID: str = os.getenv("DID_VOICE_ID", "en-US-JennyNeural")
    RUNWAYML_BASE_URL: str = os.getenv("RUNWAYML_BASE_URL", "https://api.dev.runwayml.com")
    RUNWAYML_API_VERSION: str = os.getenv("RUNWAYML_API_VERSION", "2024-11-06")
    SHOTSTACK_BASE_URL: str = os.getenv("SHOTSTACK_BASE_URL", "https://api.shotstack.io/v1")
    SYNTHESIA_BASE_URL: str = os.getenv("SYNTHESIA_BASE_URL", "https://api.synthesia.io/v2")
    FILE_IO_URL: str = os.getenv("FILE_IO_URL", "https://file.io")
    ZERO_X_ZERO_URL: str = os.getenv("ZERO_X_ZERO_URL", "https://0x0.st")
    GRAPH_API_BASE_URL: str = os.getenv("GRAPH_API_BASE_URL", "https://graph.facebook.com")
    GRAPH_API_VERSION: str = os.getenv("GRAPH_API_VERSION", "v18.0")

    # Polling (bounded attempts, fixed delay)
    POLL_MAX_ATTEMPTS: int = int(os.getenv("POLL_MAX_ATTEMPTS", "60"))
    POLL_INTERVAL_SECONDS: float = float(os.getenv("POLL_INTERVAL_SECONDS", "5"))
    SYNTHESIA_POLL_INTERVAL_SECONDS: float = float(os.getenv("SYNTHESIA_POLL_INTERVAL_SECONDS", "10"))
    INSTAGRAM_POLL_MAX_ATTEMPTS: int = int(os.getenv("INSTAGRAM_POLL_MAX_ATTEMPTS", "30"))
    INSTAGRAM_POLL_INTERVAL_SECONDS: float = float(os.getenv("INSTAGRAM_POLL_INTERVAL_SECONDS", "5"))

    # HTTP client
    VENDOR_HTTP_TIMEOUT: float = float(os.getenv("VENDOR_HTTP_TIMEOUT", "300"))  # 5 minutes
    VENDOR_MAX_RETRIES: int = int(os.getenv("VENDOR_MAX_RETRIES", "3"))

    # Upload limits (bytes)
    MAX_PRODUCT_IMAGE_SIZE: int = int(os.getenv("MAX_PRODUCT_IMAGE_SIZE", str(10 * 1024 * 1024)))
    MAX_PERSON_MEDIA_SIZE: int = int(os.getenv("MAX_PERSON_MEDIA_SIZE", str(100 * 1024 * 1024)))

    @property
    def gemini_api_key(self) -> str:
        """Gemini key, preferring GOOGLE_GEMINI_API_KEY over GEMINI_API_KEY"""
        return self.GOOGLE_GEMINI_API_KEY or self.GEMINI_API_KEY

    @property
    def synthesia_api_key(self) -> str:
        """Synthesia key, falling back to the legacy AI_API_KEY"""
        return self.SYNTHESIA_API_KEY or self.AI_API_KEY

    @property
    def cors_origins_list(self) -> list:
        """Parse CORS origins into a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]


# Global settings instance
settings = Settings()
