"""
Marketing pipeline package.

This package contains the core stages of a project:
- Script generation from product metadata
- Video generation (avatar, product animation, compositing)
- Website generation from HTML templates
- Social publishing to Instagram
- Error handling and status rollback shared by every stage
"""

__version__ = "0.1.0"

from .error_handler import PipelineError, ErrorCode, should_retry

__all__ = [
    "PipelineError",
    "ErrorCode",
    "should_retry",
]
