"""Forum response models shared by the forum use cases.

Field names are serialized in the camelCase shape the web client reads,
with the post id exposed as ``_id``.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mealtalk.domain.error import NotFoundError
from mealtalk.domain.model import Post
from mealtalk.domain.service import PostTreeNode
from mealtalk.domain.value import PostCategory, PostId


class PostResponse(BaseModel):
    """A single post without its replies."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    post_id: str = Field(alias="_id")
    author_id: str
    author_name: str
    title: str
    content: str
    category: PostCategory
    likes: list[str]
    parent_id: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, post: Post) -> "PostResponse":
        return cls(**_post_fields(post))


class PostTreeResponse(PostResponse):
    """A post with its replies nested to arbitrary depth.

    Documents the shape of the forum listing. The listing itself is
    rendered by ``render_forest``, which does not recurse.
    """

    replies: list["PostTreeResponse"] = Field(default_factory=list)


def render_forest(roots: list[PostTreeNode]) -> str:
    """Render a forest of post trees as a JSON array.

    Each post's own fields are serialized by ``PostResponse``; the nesting
    is assembled with an explicit stack so that arbitrarily deep reply
    chains serialize without hitting recursion limits.

    Args:
        roots: Root nodes, already in display order

    Returns:
        JSON text in the ``PostTreeResponse`` shape
    """
    parts = ["["]
    stack: list[PostTreeNode | str] = []
    _push_siblings(stack, roots, "]")

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        fields = PostResponse.from_domain(item.post).model_dump_json(by_alias=True)
        # Reopen the object to append its replies
        parts.append(fields[:-1] + ',"replies":[')
        _push_siblings(stack, item.replies, "]}")

    return "".join(parts)


def _push_siblings(
    stack: list[PostTreeNode | str], nodes: list[PostTreeNode], closing: str
) -> None:
    # Pushed in reverse so they pop in order, comma separated
    stack.append(closing)
    for index in range(len(nodes) - 1, -1, -1):
        stack.append(nodes[index])
        if index:
            stack.append(",")


def _post_fields(post: Post) -> dict:
    return {
        "post_id": str(post.id),
        "author_id": str(post.author_id),
        "author_name": post.author_name,
        "title": post.title,
        "content": post.content,
        "category": post.category,
        "likes": [str(liker) for liker in post.liker_ids],
        "parent_id": str(post.parent_id) if post.parent_id else None,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


def parse_post_id(raw: str) -> PostId:
    """Parse a post id from a request.

    An id that can't name any post is reported the same way as a missing one.

    Raises:
        NotFoundError: If ``raw`` is not a valid post id
    """
    try:
        return PostId(UUID(raw))
    except ValueError:
        raise NotFoundError("Post", raw)
