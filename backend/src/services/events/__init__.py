"""
Live event fanout.

Provides the in-memory NotificationHub and the EventPublisher port it implements.
"""

from .hub import DEFAULT_QUEUE_MAXSIZE, NotificationHub, Subscription, SubscriptionClosed
from .ports import MESSAGE_CREATED, EventPublisher

__all__ = [
    "NotificationHub",
    "Subscription",
    "SubscriptionClosed",
    "EventPublisher",
    "MESSAGE_CREATED",
    "DEFAULT_QUEUE_MAXSIZE",
]
