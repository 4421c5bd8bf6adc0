"""
Project status transitions with rollback.

Every long-running stage moves a project into a transient status
(video_generating, website_generating, instagram_uploading) before calling
external services. If the stage fails the project goes back to the stable
status it had when the stage started, so the user can retry.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from sqlalchemy.orm import Session

from models import Project, ProjectStatus


logger = structlog.get_logger(__name__)


def set_status(db: Session, project: Project, status: str) -> None:
    """Set and commit a project's status"""
    project.status = status
    db.commit()
    db.refresh(project)


@asynccontextmanager
async def track_stage(db: Session, project: Project, working_status: str) -> AsyncIterator[Project]:
    """
    Run a stage under a transient status.

    The success status is set by the caller inside the block. On any
    exception the session is rolled back, the prior stable status restored and
    the exception re-raised.

    Example:
        >>> async with track_stage(db, project, ProjectStatus.VIDEO_GENERATING):
        ...     project.generated_video_path = await pipeline.generate_video(...)
        ...     project.status = ProjectStatus.VIDEO_COMPLETE
    """
    prior_status = ProjectStatus.stable_fallback(project.status)
    log = logger.bind(project_id=project.id, working_status=working_status, prior_status=prior_status)
    if ProjectStatus.is_transient(project.status):
        # A previous stage was interrupted without reverting
        log.warning("project_stage_stuck_status", stuck_status=project.status)

    set_status(db, project, working_status)
    log.info("project_stage_started")

    try:
        yield project
        db.commit()
    except BaseException as e:
        db.rollback()
        project = db.get(Project, project.id) or project
        project.status = prior_status
        db.commit()
        log.warning("project_stage_reverted", error=str(e), error_type=type(e).__name__)
        raise

    log.info("project_stage_completed", status=project.status)
