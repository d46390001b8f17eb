"""
Event ports - Interfaces between the record store and live event fanout.

Interfaces:
- EventPublisher: Best-effort fanout used by the record store on creation
"""

from __future__ import annotations

from typing import Any, Protocol


# Topic used for "message created" notifications
MESSAGE_CREATED = "message_created"


class EventPublisher(Protocol):
    """Best-effort live event fanout interface.

    Used for real-time delivery to in-process listeners.
    Events published here may be dropped - there is no replay.
    """

    def publish(self, topic: str, payload: Any) -> None:
        """Publish an event for live subscribers of a topic."""
        ...
