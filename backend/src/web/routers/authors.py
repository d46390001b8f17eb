"""
Authors Router - API endpoints for authors and their messages
"""
from typing import List

from fastapi import APIRouter, Depends

from ...services.records import RecordStore
from ..dependencies import get_store
from ..schemas import AuthorResponse, CountResponse, MessageResponse

router = APIRouter(prefix="/api/authors", tags=["authors"])


@router.get("", response_model=List[AuthorResponse])
async def list_authors(store: RecordStore = Depends(get_store)):
    """All known authors"""
    return [AuthorResponse.from_record(author) for author in store.list_authors()]


@router.get("/count", response_model=CountResponse)
async def count_authors(store: RecordStore = Depends(get_store)):
    """Number of known authors"""
    return CountResponse(count=store.count_authors())


@router.get("/{author_name}/messages", response_model=List[MessageResponse])
async def list_messages(author_name: str, store: RecordStore = Depends(get_store)):
    """Messages written by an author, oldest first"""
    return [MessageResponse.from_record(m) for m in store.list_messages(author_name)]
