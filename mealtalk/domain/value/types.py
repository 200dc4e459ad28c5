"""Domain value types for the forum."""

from enum import Enum


class PostCategory(str, Enum):
    """Category a post is filed under.

    Fixed at creation; there is no path for changing it afterwards.
    """

    RECIPE = "recipe"
    HEALTH = "health"
    TIPS = "tips"
    QUESTION = "question"
