"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .jwt_service import JWTService

__all__ = [
    "CommentService",
    "JWTService",
    "Service",
]
