"""Domain services."""

from .base import Service
from .jwt_service import JWTService
from .post_service import PostService, PostTreeNode
from .user_service import UserService

__all__ = [
    "JWTService",
    "PostService",
    "PostTreeNode",
    "Service",
    "UserService",
]
