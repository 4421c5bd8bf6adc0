"""
SQLAlchemy database models
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text
from database import Base


class Project(Base):
    """
    Project model for a single marketing submission

    Holds the uploaded inputs, every derived artifact and the workflow status.
    """
    __tablename__ = "projects"

    # Primary key
    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))

    # Uploaded media
    product_image_path = Column(String, nullable=True)
    person_media_path = Column(String, nullable=True)
    person_media_type = Column(String, nullable=True)  # image, video

    # Product metadata
    product_name = Column(String, nullable=True)
    product_description = Column(Text, nullable=True)
    product_category = Column(String, nullable=True)
    product_price = Column(String, nullable=True)

    # Derived artifacts
    generated_script = Column(Text, nullable=True)
    generated_video_path = Column(String, nullable=True)
    website_path = Column(String, nullable=True)
    website_url = Column(String, nullable=True)
    instagram_post_id = Column(String, nullable=True)
    instagram_post_url = Column(String, nullable=True)

    # Workflow
    status = Column(String, nullable=False, default="uploaded", index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Project(id={self.id}, status={self.status}, product={self.product_name})>"

    def to_dict(self):
        """Convert project to dictionary"""
        return {
            "id": self.id,
            "product_image_path": self.product_image_path,
            "person_media_path": self.person_media_path,
            "person_media_type": self.person_media_type,
            "product_name": self.product_name,
            "product_description": self.product_description,
            "product_category": self.product_category,
            "product_price": self.product_price,
            "generated_script": self.generated_script,
            "generated_video_path": self.generated_video_path,
            "website_path": self.website_path,
            "website_url": self.website_url,
            "instagram_post_id": self.instagram_post_id,
            "instagram_post_url": self.instagram_post_url,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


# Project status constants
class ProjectStatus:
    """Constants for project status values"""
    UPLOADED = "uploaded"
    VIDEO_GENERATING = "video_generating"
    VIDEO_COMPLETE = "video_complete"
    WEBSITE_GENERATING = "website_generating"
    WEBSITE_COMPLETE = "website_complete"
    INSTAGRAM_UPLOADING = "instagram_uploading"
    INSTAGRAM_POSTED = "instagram_posted"

    # Transient status -> stable status that precedes it
    _FALLBACKS = {
        VIDEO_GENERATING: UPLOADED,
        WEBSITE_GENERATING: VIDEO_COMPLETE,
        INSTAGRAM_UPLOADING: VIDEO_COMPLETE,
    }

    @classmethod
    def all_statuses(cls):
        """Get list of all statuses in workflow order"""
        return [
            cls.UPLOADED,
            cls.VIDEO_GENERATING,
            cls.VIDEO_COMPLETE,
            cls.WEBSITE_GENERATING,
            cls.WEBSITE_COMPLETE,
            cls.INSTAGRAM_UPLOADING,
            cls.INSTAGRAM_POSTED,
        ]

    @classmethod
    def is_transient(cls, status: str) -> bool:
        return status in cls._FALLBACKS

    @classmethod
    def stable_fallback(cls, status: str) -> str:
        """Return the stable status a failed stage should revert to"""
        return cls._FALLBACKS.get(status, status)
