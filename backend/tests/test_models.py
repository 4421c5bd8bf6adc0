"""
Tests for the Project model and status workflow.
"""

from pathlib import Path

from sqlalchemy.engine import make_url

from config import settings
from database import get_db_context, init_db
from models import Project, ProjectStatus


class TestProjectStatus:
    """Test status constants and fallbacks."""

    def test_all_statuses_in_workflow_order(self):
        assert ProjectStatus.all_statuses() == [
            "uploaded",
            "video_generating",
            "video_complete",
            "website_generating",
            "website_complete",
            "instagram_uploading",
            "instagram_posted",
        ]

    def test_transient_statuses(self):
        assert ProjectStatus.is_transient(ProjectStatus.VIDEO_GENERATING)
        assert ProjectStatus.is_transient(ProjectStatus.WEBSITE_GENERATING)
        assert ProjectStatus.is_transient(ProjectStatus.INSTAGRAM_UPLOADING)
        assert not ProjectStatus.is_transient(ProjectStatus.VIDEO_COMPLETE)

    def test_stable_fallback_for_transient_statuses(self):
        assert ProjectStatus.stable_fallback(ProjectStatus.VIDEO_GENERATING) == ProjectStatus.UPLOADED
        assert ProjectStatus.stable_fallback(ProjectStatus.WEBSITE_GENERATING) == ProjectStatus.VIDEO_COMPLETE
        assert ProjectStatus.stable_fallback(ProjectStatus.INSTAGRAM_UPLOADING) == ProjectStatus.VIDEO_COMPLETE

    def test_stable_fallback_keeps_stable_statuses(self):
        for status in (ProjectStatus.UPLOADED, ProjectStatus.WEBSITE_COMPLETE, ProjectStatus.INSTAGRAM_POSTED):
            assert ProjectStatus.stable_fallback(status) == status


class TestProjectModel:
    """Test persistence defaults and serialization."""

    def test_defaults_on_insert(self, db_session):
        project = Project(product_name="Desk Lamp")
        db_session.add(project)
        db_session.commit()
        db_session.refresh(project)

        assert len(project.id) == 36
        assert project.status == ProjectStatus.UPLOADED
        assert project.created_at is not None
        assert project.updated_at is not None

    def test_updated_at_changes_on_update(self, make_project, db_session):
        project = make_project()
        created_updated_at = project.updated_at

        project.status = ProjectStatus.VIDEO_COMPLETE
        db_session.commit()
        db_session.refresh(project)

        assert project.updated_at >= created_updated_at

    def test_to_dict(self, make_project):
        project = make_project(website_url="/static/generated/websites/abc/index.html")
        data = project.to_dict()

        assert data["id"] == project.id
        assert data["product_name"] == "EcoBottle"
        assert data["status"] == "uploaded"
        assert data["website_url"] == "/static/generated/websites/abc/index.html"
        assert data["instagram_post_id"] is None
        assert isinstance(data["created_at"], str)

    def test_repr(self, make_project):
        project = make_project()
        assert "EcoBottle" in repr(project)
        assert project.id in repr(project)


class TestDatabaseSetup:
    """Test table creation against the configured SQLite file."""

    def test_init_db_and_session_context(self):
        init_db()

        with get_db_context() as db:
            project = Project(product_name="Desk Lamp")
            db.add(project)
            db.commit()
            project_id = project.id

        with get_db_context() as db:
            stored = db.get(Project, project_id)
            assert stored.product_name == "Desk Lamp"
            db.delete(stored)
            db.commit()

    def test_sqlite_directory_is_created(self):
        init_db()

        assert Path(make_url(settings.DATABASE_URL).database).parent.is_dir()
