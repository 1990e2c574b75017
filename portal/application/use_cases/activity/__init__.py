"""Activity feed recording and reading."""

from .feed import ActivityFeedReader, build_feed_user, split_user_name
from .recorder import ActivityRecorder, DESCRIPTION_TEMPLATES, describe_activity

__all__ = [
    "ActivityFeedReader",
    "ActivityRecorder",
    "DESCRIPTION_TEMPLATES",
    "build_feed_user",
    "describe_activity",
    "split_user_name",
]
