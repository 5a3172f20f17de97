"""Subscription id generation."""

import uuid6

SUBSCRIPTION_ID_PREFIX = "sub_"


def new_subscription_id() -> str:
    """
    Generate a time-ordered subscription id.

    Returns:
        An id of the form "sub_<uuid7>".
    """
    return f"{SUBSCRIPTION_ID_PREFIX}{uuid6.uuid7()}"
