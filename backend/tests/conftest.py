"""
Shared fixtures.

Environment variables are set before any backend module is imported so
config.settings picks up temporary storage, no vendor credentials and
zero-delay polling.
"""

import os
import tempfile

_storage_root = tempfile.mkdtemp(prefix="marketing-agent-tests-")

os.environ.update({
    "DATABASE_URL": f"sqlite:///{_storage_root}/app.db",
    "UPLOAD_PATH": os.path.join(_storage_root, "uploads"),
    "GENERATED_VIDEO_PATH": os.path.join(_storage_root, "generated", "videos"),
    "WEBSITE_PATH": os.path.join(_storage_root, "generated", "websites"),
    "AI_PROVIDER": "mock",
    "USE_FULL_AI_PIPELINE": "false",
    "USE_V0_STYLE": "true",
    "USE_AI_CAPTIONS": "false",
    "GOOGLE_GEMINI_API_KEY": "",
    "GEMINI_API_KEY": "",
    "DID_API_KEY": "",
    "RUNWAYML_API_KEY": "",
    "SHOTSTACK_API_KEY": "",
    "SYNTHESIA_API_KEY": "",
    "AI_API_KEY": "",
    "INSTAGRAM_ACCESS_TOKEN": "",
    "INSTAGRAM_USER_ID": "",
    "POLL_MAX_ATTEMPTS": "3",
    "POLL_INTERVAL_SECONDS": "0",
    "SYNTHESIA_POLL_INTERVAL_SECONDS": "0",
    "INSTAGRAM_POLL_MAX_ATTEMPTS": "3",
    "INSTAGRAM_POLL_INTERVAL_SECONDS": "0",
})

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from models import Project, ProjectStatus
from tests.utils import make_png


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def png_file(tmp_path) -> str:
    path = tmp_path / "product.png"
    path.write_bytes(make_png())
    return str(path)


@pytest.fixture
def video_file(tmp_path) -> str:
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"fake mp4 data")
    return str(path)


@pytest.fixture
def db_session():
    """In-memory SQLite session shared across threads"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def make_project(db_session):
    """Factory that stores a project with sensible defaults"""
    def _make_project(**overrides) -> Project:
        values = {
            "product_image_path": "/tmp/uploads/product.png",
            "person_media_path": "/tmp/uploads/presenter.jpg",
            "person_media_type": "image",
            "product_name": "EcoBottle",
            "product_description": "Insulated stainless steel water bottle",
            "product_category": "Lifestyle",
            "product_price": "$29",
            "generated_script": "Wait for it! The EcoBottle keeps drinks cold all day. Only $29!",
            "status": ProjectStatus.UPLOADED,
        }
        values.update(overrides)
        project = Project(**values)
        db_session.add(project)
        db_session.commit()
        db_session.refresh(project)
        return project

    return _make_project


@pytest.fixture
def app(db_session):
    """FastAPI app wired to the in-memory database"""
    from main import app as fastapi_app

    def _get_test_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = _get_test_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
