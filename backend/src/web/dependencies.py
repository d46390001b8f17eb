"""
Request dependencies - per-app record store and notification hub.
"""

from fastapi import Request

from ..services.events import NotificationHub
from ..services.records import RecordStore


def get_store(request: Request) -> RecordStore:
    """The RecordStore owned by the running app."""
    return request.app.state.store


def get_hub(request: Request) -> NotificationHub:
    """The NotificationHub owned by the running app."""
    return request.app.state.hub
