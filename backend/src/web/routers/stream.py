"""
Stream Router - Server-Sent Events for newly created messages
"""
import asyncio
import json
import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from ...services.events import (
    MESSAGE_CREATED,
    NotificationHub,
    Subscription,
    SubscriptionClosed,
)
from ..dependencies import get_hub
from ..schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stream", tags=["stream"])

MESSAGE_CREATED_EVENT = "messageCreated"


def _format_sse(event: str, data: object) -> str:
    """Encode data as SSE-formatted string."""
    lines = [f"event: {event}"]
    if isinstance(data, str):
        lines.append(f"data: {data}")
    else:
        lines.append(f"data: {json.dumps(data, ensure_ascii=False)}")
    lines.append("")
    lines.append("")
    return "\n".join(lines)


def _client_label(request: Request) -> str:
    if request.client is None:
        return "unknown"
    return f"{request.client.host}:{request.client.port}"


async def message_created_events(
    request: Request,
    subscription: Subscription,
    heartbeat_s: float,
) -> AsyncIterator[str]:
    """
    Relay created messages from a subscription as SSE frames.

    Sends a keep-alive comment after ``heartbeat_s`` seconds of silence.
    Ends when the client goes away or the subscription is cancelled.
    """
    client = _client_label(request)
    try:
        while True:
            if await request.is_disconnected():
                break
            try:
                message = await asyncio.wait_for(subscription.get(), timeout=heartbeat_s)
            except SubscriptionClosed:
                break
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue

            data = MessageResponse.from_record(message).model_dump()
            yield _format_sse(MESSAGE_CREATED_EVENT, data)

    except asyncio.CancelledError:
        pass
    finally:
        await subscription.cancel()
        logger.info(f"Client [{client}] disconnected from {MESSAGE_CREATED_EVENT}")


@router.get("/messages")
async def stream_messages(request: Request, hub: NotificationHub = Depends(get_hub)):
    """
    Server-Sent Events stream of messages as they are created.

    Sends:
    - messageCreated: one per created message, shaped like GET /api/messages/{id}

    Only messages created after the connection is established are sent.
    """
    subscription = await hub.subscribe(MESSAGE_CREATED)
    logger.info(f"Client [{_client_label(request)}] connected to {MESSAGE_CREATED_EVENT}")

    headers = {
        "Cache-Control": "no-cache",
        "X-Accel-Buffering": "no",  # Disable Nginx buffering
    }
    return StreamingResponse(
        message_created_events(request, subscription, request.app.state.config.sse_heartbeat_s),
        media_type="text/event-stream",
        headers=headers,
    )
