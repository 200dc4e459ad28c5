"""Delete post use case."""

from uuid import UUID

from pydantic import BaseModel

from mealtalk.domain.service import PostService
from mealtalk.domain.value import UserId

from .schemas import parse_post_id


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str
    user_id: str  # Current user ID (must be author)


class DeletePostResponse(BaseModel):
    """Delete post response."""

    message: str


class DeletePostUseCase:
    """Use case for deleting a single post.

    Replies to the deleted post stay in the store as orphans.
    """

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the user doesn't own the post
        """
        await self.post_service.delete_post(
            post_id=parse_post_id(request.post_id),
            user_id=UserId(UUID(request.user_id)),
        )
        return DeletePostResponse(message="Post deleted")
