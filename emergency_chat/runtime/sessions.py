# runtime/sessions.py
from __future__ import annotations

import logging
from typing import Dict, Optional

from emergency_chat.runtime.conversation import ConversationStore, ReplySource
from emergency_chat.runtime.prompts import GREETING

logger = logging.getLogger(__name__)


class SessionRegistry:
    """One ConversationStore per session id; stores share only the (stateless) gateway."""

    def __init__(self, gateway: ReplySource, *, greeting: Optional[str] = GREETING) -> None:
        self.gateway = gateway
        self.greeting = greeting
        self._stores: Dict[str, ConversationStore] = {}

    def get(self, session_id: str) -> ConversationStore:
        store = self._stores.get(session_id)
        if store is None:
            logger.debug("new conversation for session %s", session_id)
            store = ConversationStore(self.gateway, greeting=self.greeting)
            self._stores[session_id] = store
        return store

    def peek(self, session_id: str) -> Optional[ConversationStore]:
        """Existing store for the session, without creating one."""
        return self._stores.get(session_id)

    def drop(self, session_id: str) -> bool:
        return self._stores.pop(session_id, None) is not None

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._stores

    def __len__(self) -> int:
        return len(self._stores)
