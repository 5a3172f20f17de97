"""Utility modules for topic routing."""

from .subscription_id import new_subscription_id
from .topic_matcher import get_matching_topics, matches, matches_any

__all__ = [
    "get_matching_topics",
    "matches",
    "matches_any",
    "new_subscription_id",
]
