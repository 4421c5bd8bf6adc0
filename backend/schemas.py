"""
Pydantic schemas for request/response validation
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime


ProductVideoStyle = Literal["rotation", "zoom", "pan", "reveal", "auto"]
CompositeLayout = Literal["product_main", "avatar_main"]


class UploadResponse(BaseModel):
    """Response model for the upload endpoint"""
    project_id: str = Field(..., description="Unique project identifier")
    status: str = Field(..., description="Initial project status")
    message: str = Field(..., description="Success message")
    generated_script: str = Field(..., description="Marketing script generated by Gemini")
    product_name: Optional[str] = None
    product_description: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "project_id": "550e8400-e29b-41d4-a716-446655440000",
                "status": "uploaded",
                "message": "Files uploaded successfully",
                "generated_script": "Wait for it! The EcoBottle keeps drinks cold for 24 hours. Only $29! Get yours today!",
                "product_name": "EcoBottle",
                "product_description": "Insulated stainless steel water bottle"
            }
        }


class ProjectResponse(BaseModel):
    """A single project record"""
    id: str
    product_image_path: Optional[str] = None
    person_media_path: Optional[str] = None
    person_media_type: Optional[str] = None
    product_name: Optional[str] = None
    product_description: Optional[str] = None
    product_category: Optional[str] = None
    product_price: Optional[str] = None
    generated_script: Optional[str] = None
    generated_video_path: Optional[str] = None
    website_path: Optional[str] = None
    website_url: Optional[str] = None
    instagram_post_id: Optional[str] = None
    instagram_post_url: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProjectListResponse(BaseModel):
    """All projects, newest first"""
    projects: List[ProjectResponse] = Field(default_factory=list)


class GenerateVideoRequest(BaseModel):
    """Optional video options. The script always comes from the upload step."""
    product_video_style: Optional[ProductVideoStyle] = Field(
        default=None,
        description="Camera motion for the product shot (rotation, zoom, pan, reveal, auto)"
    )
    layout: Optional[CompositeLayout] = Field(
        default=None,
        description="Composite layout: product_main (avatar overlay) or avatar_main (product overlay)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "product_video_style": "rotation",
                "layout": "product_main"
            }
        }


class GenerateVideoResponse(BaseModel):
    """Response model for video generation"""
    project_id: str
    video_path: str = Field(..., description="Local path of the final video")
    status: str


class GenerateWebsiteResponse(BaseModel):
    """Response model for website generation"""
    project_id: str
    website_path: str = Field(..., description="Directory containing index.html, styles.css and script.js")
    website_url: str = Field(..., description="Public URL of the generated index page")
    status: str


class InstagramUploadRequest(BaseModel):
    """Request model for posting to Instagram. Missing fields fall back to the environment."""
    instagram_access_token: Optional[str] = Field(default=None, description="Graph API access token")
    instagram_user_id: Optional[str] = Field(default=None, description="Instagram business account id")
    custom_caption: Optional[str] = Field(default=None, description="Caption to use instead of the generated one")

    class Config:
        json_schema_extra = {
            "example": {
                "instagram_access_token": "EAAG...",
                "instagram_user_id": "17841400000000000",
                "custom_caption": None
            }
        }


class InstagramUploadResponse(BaseModel):
    """Response model for a published Reel"""
    project_id: str
    instagram_post_id: str
    instagram_post_url: str
    caption: str
    status: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[str] = Field(None, description="Additional error details")

    class Config:
        json_schema_extra = {
            "example": {
                "error": "MISSING_SCRIPT",
                "message": "No script available. Please upload files first.",
                "details": "project has no generated script"
            }
        }
