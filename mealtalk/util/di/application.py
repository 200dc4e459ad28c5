"""Application layer DI providers."""

from dishka import Scope, provide

from mealtalk.application.usecase.forum import (
    CreatePostUseCase,
    DeletePostUseCase,
    EditPostUseCase,
    ListPostsUseCase,
    ToggleLikeUseCase,
)
from mealtalk.domain.service import PostService, UserService
from mealtalk.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(self, post_service: PostService) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_edit_post_use_case(self, post_service: PostService) -> EditPostUseCase:
        """Provide edit post use case."""
        return EditPostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(self, post_service: PostService) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(post_service=post_service)
