# api/chat.py
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from emergency_chat.api.deps import get_registry
from emergency_chat.data.canned import EmergencyCategory
from emergency_chat.runtime.conversation import ConversationStore
from emergency_chat.runtime.sessions import SessionRegistry
from emergency_chat.schemas.canned import CannedQAView, ShortcutsOut
from emergency_chat.schemas.chat import (
    CannedAskIn,
    CategorySelectIn,
    ChatIn,
    ChatOut,
    HistoryOut,
    Message,
    Sender,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])


def _parse_category(label: Optional[str]) -> Optional[EmergencyCategory]:
    if label is None:
        return None
    try:
        return EmergencyCategory.parse(label)
    except ValueError as e:
        logger.info("rejected category %r", label)
        raise HTTPException(status_code=422, detail=str(e))


def _history(session_id: str, store: Optional[ConversationStore], registry: SessionRegistry) -> HistoryOut:
    if store is None:
        # unknown session: what a fresh conversation would show, nothing stored
        messages = []
        if registry.greeting:
            messages.append(
                Message(text=registry.greeting, sender=Sender.BOT, timestamp=datetime.now(timezone.utc))
            )
        return HistoryOut(session_id=session_id, busy=False, messages=messages)
    return HistoryOut(
        session_id=session_id,
        busy=store.is_busy(),
        messages=list(store.messages),
    )


def _busy(session_id: str) -> HTTPException:
    logger.info("session %s busy, request rejected", session_id)
    return HTTPException(status_code=409, detail="A reply is already in progress for this session")


@router.post("", response_model=ChatOut)
async def chat_endpoint(
    payload: ChatIn,
    registry: SessionRegistry = Depends(get_registry),
):
    """
    Handle a typed emergency question:
    1. Append user message (session busy)
    2. Run reply flow (prompt + Gemini, fallback on failure)
    3. Append and return the bot reply
    """
    category = _parse_category(payload.category)
    store = registry.get(payload.session_id)
    bot = await store.submit(payload.message, category)
    if bot is None:
        raise _busy(payload.session_id)
    return ChatOut(reply=bot.text, messages=list(store.messages))


@router.get("/history", response_model=HistoryOut)
async def get_chat_history(
    session_id: str = Query(...),
    registry: SessionRegistry = Depends(get_registry),
):
    """Return the ordered conversation for a session."""
    return _history(session_id, registry.peek(session_id), registry)


@router.delete("/history", response_model=HistoryOut)
async def clear_chat_history(
    session_id: str = Query(...),
    registry: SessionRegistry = Depends(get_registry),
):
    store = registry.peek(session_id)
    if store is not None and not store.clear():
        raise _busy(session_id)
    return _history(session_id, store, registry)


@router.delete("/session")
async def end_session(
    session_id: str = Query(...),
    registry: SessionRegistry = Depends(get_registry),
):
    """Forget a session's conversation entirely."""
    store = registry.peek(session_id)
    if store is not None and store.is_busy():
        raise _busy(session_id)
    return {"session_id": session_id, "dropped": registry.drop(session_id)}


@router.post("/category", response_model=ShortcutsOut)
async def select_category(
    payload: CategorySelectIn,
    registry: SessionRegistry = Depends(get_registry),
):
    """Choose the category whose canned questions are offered as shortcuts."""
    category = _parse_category(payload.category)
    store = registry.get(payload.session_id)
    if not store.select_category(category):
        raise _busy(payload.session_id)
    return ShortcutsOut(
        session_id=payload.session_id,
        category=category.value,
        shortcuts=[
            CannedQAView(index=i, question=qa.question, answer=qa.answer)
            for i, qa in enumerate(store.shortcuts())
        ],
    )


@router.post("/canned", response_model=ChatOut)
async def ask_canned_question(
    payload: CannedAskIn,
    registry: SessionRegistry = Depends(get_registry),
):
    """Send a shortcut question through the same reply path as typed text."""
    store = registry.peek(payload.session_id)
    try:
        if store is None:
            raise LookupError("no emergency category selected")
        bot = await store.ask_canned(payload.index)
    except LookupError as e:
        logger.info("canned question rejected for session %s: %s", payload.session_id, e)
        raise HTTPException(status_code=404, detail=str(e))
    if bot is None:
        raise _busy(payload.session_id)
    return ChatOut(reply=bot.text, messages=list(store.messages))
