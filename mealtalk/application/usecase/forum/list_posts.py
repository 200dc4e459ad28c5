"""List forum posts use case."""

from mealtalk.domain.service import PostService

from .schemas import render_forest


class ListPostsUseCase:
    """Use case for reading the whole forum as a forest of reply trees.

    Root posts come newest first; replies under each post come in the order
    they were written.
    """

    def __init__(self, post_service: PostService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self) -> str:
        """Execute list posts flow.

        Returns:
            JSON array of root posts with nested replies, in the
            ``PostTreeResponse`` shape
        """
        tree = await self.post_service.build_forum_tree()
        return render_forest(tree)
