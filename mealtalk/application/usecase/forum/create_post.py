"""Create post use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from mealtalk.domain.error import ValidationError
from mealtalk.domain.service import PostService, UserService
from mealtalk.domain.value import PostCategory, PostId, UserId

from .schemas import PostResponse


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: str  # User ID from authenticated user
    title: str
    content: str
    category: PostCategory
    parent_id: str | None = None  # Post being replied to


class CreatePostUseCase:
    """Use case for creating a root post or a reply."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> PostResponse:
        """Execute create post flow.

        Steps:
        1. Load the author to snapshot their display name
        2. Create and save the post

        Args:
            request: Create post request

        Returns:
            The created post

        Raises:
            NotFoundError: If the author's account doesn't exist
            ValidationError: If the parent id is malformed
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))

        parent_id = None
        if request.parent_id:
            try:
                parent_id = PostId(UUID(request.parent_id))
            except ValueError:
                raise ValidationError(f"Invalid parent post id: {request.parent_id}")

        with logfire.span(
            "create_post.execute",
            author_id=request.author_id,
            category=request.category.value,
        ):
            post = await self.post_service.create_post(
                author=author,
                title=request.title,
                content=request.content,
                category=request.category,
                parent_id=parent_id,
            )
            return PostResponse.from_domain(post)
