"""Edit post use case."""

from uuid import UUID

from pydantic import BaseModel

from mealtalk.domain.service import PostService
from mealtalk.domain.value import UserId

from .schemas import PostResponse, parse_post_id


class EditPostRequest(BaseModel):
    """Edit post request.

    Fields left as None keep their current value.
    """

    post_id: str
    user_id: str  # Current user ID (must be author)
    title: str | None = None
    content: str | None = None


class EditPostUseCase:
    """Use case for editing a post's title and content."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize edit post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: EditPostRequest) -> PostResponse:
        """Execute edit post flow.

        Args:
            request: Edit post request

        Returns:
            The updated post, without replies

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the user doesn't own the post
        """
        post = await self.post_service.edit_post(
            post_id=parse_post_id(request.post_id),
            user_id=UserId(UUID(request.user_id)),
            title=request.title,
            content=request.content,
        )
        return PostResponse.from_domain(post)
