"""Forum use cases."""

from .create_post import CreatePostRequest, CreatePostUseCase
from .delete_post import DeletePostRequest, DeletePostResponse, DeletePostUseCase
from .edit_post import EditPostRequest, EditPostUseCase
from .list_posts import ListPostsUseCase
from .schemas import PostResponse, PostTreeResponse, render_forest
from .toggle_like import ToggleLikeRequest, ToggleLikeResponse, ToggleLikeUseCase

__all__ = [
    "CreatePostRequest",
    "CreatePostUseCase",
    "DeletePostRequest",
    "DeletePostResponse",
    "DeletePostUseCase",
    "EditPostRequest",
    "EditPostUseCase",
    "ListPostsUseCase",
    "PostResponse",
    "PostTreeResponse",
    "render_forest",
    "ToggleLikeRequest",
    "ToggleLikeResponse",
    "ToggleLikeUseCase",
]
