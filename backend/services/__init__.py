"""
Services module for third-party AI vendors and file handling
"""

from .file_upload import FileUploadService
from .polling import poll_until_complete

__all__ = ["FileUploadService", "poll_until_complete"]
