"""
Projects API Router.

One project moves through upload -> video -> website -> Instagram. Every
long-running endpoint marks the project with a transient status while it
works and reverts to the previous stable status when the stage fails.
"""

from typing import NoReturn, Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models import Project, ProjectStatus
from pipeline.error_handler import ErrorCode, PipelineError
from pipeline.project_state import track_stage
from pipeline.script_generator import ScriptGenerator, create_script_generator
from pipeline.social_publisher import SocialPublisher, create_social_publisher
from pipeline.video_pipeline import VideoPipeline, create_video_pipeline
from pipeline.website_builder import WebsiteBuilder, create_website_builder, website_url_for
from schemas import (
    ErrorResponse,
    GenerateVideoRequest,
    GenerateVideoResponse,
    GenerateWebsiteResponse,
    InstagramUploadRequest,
    InstagramUploadResponse,
    ProjectListResponse,
    ProjectResponse,
    UploadResponse,
)
from services.file_upload import FileUploadService

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1", tags=["Projects"])


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or missing prerequisite"},
    404: {"model": ErrorResponse, "description": "Project not found"},
    500: {"model": ErrorResponse, "description": "Pipeline or vendor failure"},
    504: {"model": ErrorResponse, "description": "Vendor task did not finish in time"},
}


# Dependency providers (overridden in tests)

def get_file_upload_service() -> FileUploadService:
    return FileUploadService()


def get_script_generator() -> ScriptGenerator:
    return create_script_generator()


def get_video_pipeline() -> VideoPipeline:
    return create_video_pipeline()


def get_website_builder() -> WebsiteBuilder:
    return create_website_builder()


def get_social_publisher() -> SocialPublisher:
    return create_social_publisher()


def raise_http_error(error: PipelineError) -> NoReturn:
    """Log a PipelineError and re-raise it as an HTTPException"""
    error.log_error()
    raise HTTPException(
        status_code=error.http_status,
        detail={
            "error": error.code.value,
            "message": error.get_user_friendly_message(),
            "details": error.message,
        },
    )


def internal_error(message: str, error: Exception) -> HTTPException:
    logger.error("unexpected_endpoint_error", message=message, error=str(error), exc_info=True)
    return HTTPException(
        status_code=500,
        detail={
            "error": "INTERNAL_ERROR",
            "message": message,
            "details": str(error),
        },
    )


def get_project_or_404(db: Session, project_id: str) -> Project:
    project = db.get(Project, project_id)
    if project is None:
        logger.warning("project_not_found", project_id=project_id)
        raise_http_error(PipelineError(
            ErrorCode.PROJECT_NOT_FOUND,
            f"no project with id {project_id}",
            {"project_id": project_id},
        ))
    return project


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=201,
    responses={
        201: {"description": "Files stored and script generated"},
        **ERROR_RESPONSES,
    },
    summary="Upload product and presenter media",
)
async def upload_media(
    product_image: UploadFile = File(..., description="Product image (PNG, JPG, WebP, max 10MB)"),
    person_media: UploadFile = File(..., description="Presenter photo or video (max 100MB)"),
    product_name: str = Form(""),
    product_description: str = Form(""),
    product_category: str = Form(""),
    product_price: str = Form(""),
    db: Session = Depends(get_db),
    uploads: FileUploadService = Depends(get_file_upload_service),
    script_generator: ScriptGenerator = Depends(get_script_generator),
):
    """
    Create a project from uploaded media.

    The marketing script is generated here with Gemini. When it cannot be
    generated no files are stored and no project is created.
    """
    logger.info(
        "upload_request_received",
        product_name=product_name,
        product_image=product_image.filename,
        person_media=person_media.filename,
    )

    try:
        product_content = await product_image.read()
        person_content = await person_media.read()

        uploads.validate_product_image(product_content, product_image.filename)
        person_media_type = uploads.validate_person_media(person_content, person_media.filename)

        generated_script = await script_generator.generate_script(
            product_name,
            product_description,
            product_category,
            product_price,
        )

        product_path = await uploads.save(product_content, product_image.filename)
        person_path = await uploads.save(person_content, person_media.filename)
    except PipelineError as e:
        raise_http_error(e)

    project = Project(
        product_image_path=product_path,
        person_media_path=person_path,
        person_media_type=person_media_type,
        product_name=product_name,
        product_description=product_description,
        product_category=product_category,
        product_price=product_price,
        generated_script=generated_script,
        status=ProjectStatus.UPLOADED,
    )
    db.add(project)
    db.commit()
    db.refresh(project)

    logger.info("project_created", project_id=project.id)

    return UploadResponse(
        project_id=project.id,
        status=project.status,
        message="Files uploaded successfully",
        generated_script=generated_script,
        product_name=product_name,
        product_description=product_description,
    )


@router.get("/projects", response_model=ProjectListResponse, summary="List projects")
async def list_projects(db: Session = Depends(get_db)):
    projects = db.query(Project).order_by(Project.created_at.desc()).all()
    return ProjectListResponse(projects=[ProjectResponse.model_validate(p) for p in projects])


@router.get(
    "/projects/{project_id}",
    response_model=ProjectResponse,
    responses={404: ERROR_RESPONSES[404]},
    summary="Get a project",
)
async def get_project(project_id: str, db: Session = Depends(get_db)):
    return ProjectResponse.model_validate(get_project_or_404(db, project_id))


@router.post(
    "/projects/{project_id}/generate-video",
    response_model=GenerateVideoResponse,
    responses=ERROR_RESPONSES,
    summary="Generate the marketing video",
)
async def generate_video(
    project_id: str,
    request: Optional[GenerateVideoRequest] = None,
    db: Session = Depends(get_db),
    pipeline: VideoPipeline = Depends(get_video_pipeline),
):
    """
    Generate the video with the configured provider.

    The script is always the one generated at upload time.
    """
    project = get_project_or_404(db, project_id)
    options = request or GenerateVideoRequest()

    try:
        async with track_stage(db, project, ProjectStatus.VIDEO_GENERATING):
            if not project.generated_script:
                raise PipelineError(
                    ErrorCode.MISSING_SCRIPT,
                    "project has no generated script",
                    {"project_id": project_id},
                )

            video_path = await pipeline.generate_video(
                product_image_path=project.product_image_path,
                person_media_path=project.person_media_path,
                person_media_type=project.person_media_type,
                script=project.generated_script,
                product_video_style=options.product_video_style,
                layout=options.layout,
            )
            project.generated_video_path = video_path
            project.status = ProjectStatus.VIDEO_COMPLETE
    except PipelineError as e:
        raise_http_error(e)
    except Exception as e:
        raise internal_error("Failed to generate video", e)

    return GenerateVideoResponse(
        project_id=project.id,
        video_path=project.generated_video_path,
        status=project.status,
    )


@router.post(
    "/projects/{project_id}/generate-website",
    response_model=GenerateWebsiteResponse,
    responses=ERROR_RESPONSES,
    summary="Generate the product website",
)
async def generate_website(
    project_id: str,
    db: Session = Depends(get_db),
    builder: WebsiteBuilder = Depends(get_website_builder),
):
    project = get_project_or_404(db, project_id)

    try:
        async with track_stage(db, project, ProjectStatus.WEBSITE_GENERATING):
            website_path = await builder.build(project)
            project.website_path = website_path
            project.website_url = website_url_for(website_path)
            project.status = ProjectStatus.WEBSITE_COMPLETE
    except PipelineError as e:
        raise_http_error(e)
    except Exception as e:
        raise internal_error("Failed to generate website", e)

    return GenerateWebsiteResponse(
        project_id=project.id,
        website_path=project.website_path,
        website_url=project.website_url,
        status=project.status,
    )


@router.post(
    "/projects/{project_id}/upload-instagram",
    response_model=InstagramUploadResponse,
    responses=ERROR_RESPONSES,
    summary="Post the video as an Instagram Reel",
)
async def upload_to_instagram(
    project_id: str,
    request: Optional[InstagramUploadRequest] = None,
    db: Session = Depends(get_db),
    publisher: SocialPublisher = Depends(get_social_publisher),
):
    """
    Publish the generated video.

    Credentials in the body take precedence over INSTAGRAM_ACCESS_TOKEN and
    INSTAGRAM_USER_ID.
    """
    project = get_project_or_404(db, project_id)
    body = request or InstagramUploadRequest()

    if not project.generated_video_path:
        raise_http_error(PipelineError(
            ErrorCode.MISSING_VIDEO,
            "project has no generated video",
            {"project_id": project_id},
            user_message="No generated video found. Please generate video first.",
        ))

    access_token = body.instagram_access_token or settings.INSTAGRAM_ACCESS_TOKEN
    if not access_token:
        raise_http_error(PipelineError(
            ErrorCode.MISSING_CREDENTIALS,
            "no Instagram access token in request or environment",
            {"service": "instagram"},
            user_message="Instagram access token is required",
        ))

    user_id = body.instagram_user_id or settings.INSTAGRAM_USER_ID
    if not user_id:
        raise_http_error(PipelineError(
            ErrorCode.MISSING_CREDENTIALS,
            "no Instagram user id in request or environment",
            {"service": "instagram"},
            user_message="Instagram user ID is required",
        ))

    try:
        async with track_stage(db, project, ProjectStatus.INSTAGRAM_UPLOADING):
            caption = body.custom_caption or await publisher.build_caption(
                project.product_name,
                project.product_description,
                project.product_price,
            )
            post_id, post_url = await publisher.publish(
                project.generated_video_path,
                caption,
                access_token,
                user_id,
            )
            project.instagram_post_id = post_id
            project.instagram_post_url = post_url
            project.status = ProjectStatus.INSTAGRAM_POSTED
    except PipelineError as e:
        raise_http_error(e)
    except Exception as e:
        raise internal_error("Failed to upload to Instagram", e)

    return InstagramUploadResponse(
        project_id=project.id,
        instagram_post_id=project.instagram_post_id,
        instagram_post_url=project.instagram_post_url,
        caption=caption,
        status=project.status,
        message="Video successfully posted to Instagram!",
    )
