from typing import List

from fastapi import APIRouter, Depends, status

from core.auth import require_history_token
from models.history import CreateHistoryPayload, HistoryEntry
from services.history_service import HistoryStore, get_history_store

router = APIRouter(
    prefix="/history",
    tags=["history"],
    dependencies=[Depends(require_history_token)],
)


@router.get("", response_model=List[HistoryEntry], response_model_by_alias=True)
async def list_history(store: HistoryStore = Depends(get_history_store)):
    """Return edit history, newest first"""
    return store.list()


@router.post(
    "",
    response_model=HistoryEntry,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_history_entry(
    payload: CreateHistoryPayload,
    store: HistoryStore = Depends(get_history_store),
):
    """Record a prompt / result pair"""
    entry = store.append(payload.prompt, payload.image_url)
    print(f"📝 History entry saved: {entry.id}")
    return entry
