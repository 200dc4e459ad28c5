"""Forum routes.

Every route requires an ``Authorization: Bearer <token>`` header.
"""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Response, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mealtalk.application.usecase.forum import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    EditPostRequest,
    EditPostUseCase,
    ListPostsUseCase,
    PostResponse,
    PostTreeResponse,
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
)
from mealtalk.domain.error import (
    DomainError,
    NotAuthorizedError,
    NotFoundError,
)
from mealtalk.domain.service import JWTService
from mealtalk.domain.value import PostCategory, UserId
from mealtalk.util.jwt import JWTError

router = APIRouter(prefix="/api/forum", tags=["forum"], route_class=DishkaRoute)

BEARER_PREFIX = "Bearer "


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post or a reply."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    category: PostCategory
    parent_id: UUID | None = None


class EditPostAPIRequest(BaseModel):
    """API request for editing a post. Omitted fields are left unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=300)
    content: str | None = Field(default=None, min_length=1, max_length=10000)


def authenticate(authorization: str | None, jwt_service: JWTService) -> UserId:
    """Resolve the caller's identity from the Authorization header.

    Args:
        authorization: Raw Authorization header value
        jwt_service: JWT service from DI

    Returns:
        The authenticated user's ID

    Raises:
        HTTPException: 401 if the header is missing, malformed or invalid
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
        )

    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
        )

    try:
        return jwt_service.resolve_identity(token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


@router.get("", response_model=list[PostTreeResponse])
async def list_posts(
    jwt_service: FromDishka[JWTService],
    list_posts_use_case: FromDishka[ListPostsUseCase],
    authorization: str | None = Header(default=None),
) -> Response:
    """List root posts, newest first, each with its nested replies.

    The body is rendered by the use case, so ``response_model`` only
    documents its shape.

    Args:
        jwt_service: JWT service from DI
        list_posts_use_case: List posts use case from DI
        authorization: Bearer token header

    Returns:
        Forest of root posts with replies to arbitrary depth
    """
    authenticate(authorization, jwt_service)

    try:
        body = await list_posts_use_case.execute()
    except Exception as e:
        logfire.error("Unexpected error listing posts", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch posts",
        )

    return Response(content=body, media_type="application/json")


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    request: CreatePostAPIRequest,
    jwt_service: FromDishka[JWTService],
    create_post_use_case: FromDishka[CreatePostUseCase],
    authorization: str | None = Header(default=None),
) -> PostResponse:
    """Create a root post, or a reply when ``parentId`` is given.

    The parent id is stored as given; it is not checked against existing posts.

    Raises:
        HTTPException: 401 if not authenticated, 404 if the author's account
            is gone, 400 on domain validation failure
    """
    user_id = authenticate(authorization, jwt_service)

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                author_id=str(user_id),
                title=request.title,
                content=request.content,
                category=request.category,
                parent_id=str(request.parent_id) if request.parent_id else None,
            )
        )
    except NotFoundError as e:
        logfire.warn("Post author not found", user_id=str(user_id))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except (DomainError, ValueError) as e:
        logfire.warn("Post creation validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception as e:
        logfire.error("Unexpected error creating post", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create post",
        )


@router.put("/{post_id}", response_model=PostResponse)
async def edit_post(
    post_id: str,
    request: EditPostAPIRequest,
    jwt_service: FromDishka[JWTService],
    edit_post_use_case: FromDishka[EditPostUseCase],
    authorization: str | None = Header(default=None),
) -> PostResponse:
    """Edit a post's title and/or content.

    Only the post author can edit.

    Args:
        post_id: Post ID
        request: Fields to change
        jwt_service: JWT service from DI
        edit_post_use_case: Edit post use case from DI
        authorization: Bearer token header

    Returns:
        The updated post, without replies

    Raises:
        HTTPException: 401 if not authenticated, 403 if not the author,
            404 if the post doesn't exist
    """
    user_id = authenticate(authorization, jwt_service)

    try:
        return await edit_post_use_case.execute(
            EditPostRequest(
                post_id=post_id,
                user_id=str(user_id),
                title=request.title,
                content=request.content,
            )
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized post edit", post_id=post_id, user_id=str(user_id))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except (DomainError, ValueError) as e:
        logfire.warn("Post edit validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception as e:
        logfire.error("Unexpected error editing post", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update post",
        )


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: str,
    jwt_service: FromDishka[JWTService],
    delete_post_use_case: FromDishka[DeletePostUseCase],
    authorization: str | None = Header(default=None),
) -> DeletePostResponse:
    """Delete a post. Replies to it are kept.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not the author,
            404 if the post doesn't exist
    """
    user_id = authenticate(authorization, jwt_service)

    try:
        return await delete_post_use_case.execute(
            DeletePostRequest(post_id=post_id, user_id=str(user_id))
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except NotAuthorizedError as e:
        logfire.warn(
            "Unauthorized post delete", post_id=post_id, user_id=str(user_id)
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except Exception as e:
        logfire.error("Unexpected error deleting post", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete post",
        )


@router.post("/{post_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    post_id: str,
    jwt_service: FromDishka[JWTService],
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    authorization: str | None = Header(default=None),
) -> ToggleLikeResponse:
    """Like a post, or remove the caller's like if already present.

    Raises:
        HTTPException: 401 if not authenticated, 404 if the post doesn't exist
    """
    user_id = authenticate(authorization, jwt_service)

    try:
        return await toggle_like_use_case.execute(
            ToggleLikeRequest(post_id=post_id, user_id=str(user_id))
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception as e:
        logfire.error("Unexpected error toggling like", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update likes",
        )
