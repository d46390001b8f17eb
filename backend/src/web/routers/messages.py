"""
Messages Router - API endpoints for creating, reading and updating messages
"""
import logging

from fastapi import APIRouter, Depends, Request, status

from ...services.records import RecordStore
from ..dependencies import get_store
from ..limiter import limiter, write_limit
from ..schemas import (
    CountResponse,
    MessageInput,
    MessageResponse,
    UpdateMessageRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.get("/count", response_model=CountResponse)
async def count_messages(store: RecordStore = Depends(get_store)):
    """Number of messages created so far"""
    return CountResponse(count=store.count_messages())


@router.get("/{message_id}", response_model=MessageResponse)
async def get_message(message_id: str, store: RecordStore = Depends(get_store)):
    """Get a single message by ID"""
    return MessageResponse.from_record(store.get_message(message_id))


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(write_limit)
async def create_message(
    request: Request,
    payload: MessageInput,
    store: RecordStore = Depends(get_store),
):
    """Create a message, creating its author the first time the name is seen"""
    message = await store.create_message(
        payload.content,
        payload.author.name,
        author_age=payload.author.age,
        author_nationality=payload.author.nationality,
    )
    logger.info(f"Message {message.id} created by author {message.author.id}")
    return MessageResponse.from_record(message)


@router.put("/{message_id}", response_model=MessageResponse)
@limiter.limit(write_limit)
async def update_message(
    request: Request,
    message_id: str,
    payload: UpdateMessageRequest,
    store: RecordStore = Depends(get_store),
):
    """Replace the content of a message"""
    message = await store.update_message(message_id, payload.content)
    return MessageResponse.from_record(message)
