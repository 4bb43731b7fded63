"""Publish/subscribe engine used by every modeled object."""

from axiomatic.bus.topic_tree import (
    ListenerList,
    Subscription,
    SubscriptionGroup,
    TopicTree,
)

__all__ = ["ListenerList", "Subscription", "SubscriptionGroup", "TopicTree"]
