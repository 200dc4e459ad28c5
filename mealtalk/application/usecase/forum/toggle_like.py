"""Toggle like use case."""

from uuid import UUID

from pydantic import BaseModel

from mealtalk.domain.service import PostService
from mealtalk.domain.value import UserId

from .schemas import parse_post_id


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    post_id: str
    user_id: str


class ToggleLikeResponse(BaseModel):
    """Toggle like response with the post's current like set."""

    likes: list[str]


class ToggleLikeUseCase:
    """Use case for liking or un-liking a post."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        likes = await self.post_service.toggle_like(
            post_id=parse_post_id(request.post_id),
            user_id=UserId(UUID(request.user_id)),
        )
        return ToggleLikeResponse(likes=[str(liker) for liker in likes])
