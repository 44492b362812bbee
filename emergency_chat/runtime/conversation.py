# runtime/conversation.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol, Tuple, Union

from emergency_chat.data.canned import CannedQA, EmergencyCategory, canned_questions
from emergency_chat.runtime.prompts import FALLBACK_REPLY, GREETING
from emergency_chat.schemas.chat import Message, Sender

logger = logging.getLogger(__name__)


class ReplySource(Protocol):
    async def get_reply(
        self, user_text: str, category: Optional[Union[EmergencyCategory, str]] = None
    ) -> str: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationStore:
    """
    Ordered, append-only conversation for one session plus a busy flag.
    - submit: user message → reply request (busy) → bot message (not busy)
    - a submit while busy, or with blank text, is a no-op
    - clear: back to empty, or to the single greeting when seeded
    """

    def __init__(
        self,
        gateway: ReplySource,
        *,
        greeting: Optional[str] = GREETING,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._gateway = gateway
        self._greeting = greeting
        self._clock = clock
        self._messages: List[Message] = []
        self._busy = False
        self.selected_category: Optional[EmergencyCategory] = None
        self._seed()

    def _seed(self) -> None:
        if self._greeting:
            self._messages.append(
                Message(text=self._greeting, sender=Sender.BOT, timestamp=self._now())
            )

    def _now(self) -> datetime:
        # timestamps never go backwards along the sequence
        now = self._clock()
        if self._messages and now < self._messages[-1].timestamp:
            return self._messages[-1].timestamp
        return now

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def is_busy(self) -> bool:
        return self._busy

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def clear(self) -> bool:
        """Reset the conversation. Ignored while a reply is outstanding."""
        if self._busy:
            logger.info("clear ignored: reply in progress")
            return False
        self._messages = []
        self._seed()
        return True

    async def submit(
        self,
        text: str,
        category: Optional[Union[EmergencyCategory, str]] = None,
    ) -> Optional[Message]:
        """Append the user's text and the reply to it. Returns the bot message, or None on a no-op."""
        if self._busy:
            logger.info("submit ignored: reply in progress")
            return None
        if not (text or "").strip():
            return None

        self.append(Message(text=text, sender=Sender.USER, timestamp=self._now()))
        self._busy = True
        try:
            try:
                reply = await self._gateway.get_reply(text, category)
            except asyncio.CancelledError:
                # every user message is followed by a bot message
                logger.warning("reply request cancelled, using fallback")
                self.append(Message(text=FALLBACK_REPLY, sender=Sender.BOT, timestamp=self._now()))
                raise
            except Exception as exc:
                logger.warning("reply gateway raised, using fallback: %s", exc)
                reply = FALLBACK_REPLY
            bot = Message(text=reply, sender=Sender.BOT, timestamp=self._now())
            self.append(bot)
            return bot
        finally:
            self._busy = False

    # -- category browsing --

    def select_category(self, category: Union[EmergencyCategory, str]) -> bool:
        if self._busy:
            return False
        if not isinstance(category, EmergencyCategory):
            category = EmergencyCategory.parse(category)
        self.selected_category = category
        return True

    def shortcuts(self) -> Tuple[CannedQA, ...]:
        if self.selected_category is None:
            return ()
        return canned_questions(self.selected_category)

    async def ask_canned(self, index: int) -> Optional[Message]:
        """Submit one of the selected category's shortcut questions."""
        if self.selected_category is None:
            raise LookupError("no emergency category selected")
        options = self.shortcuts()
        if not 0 <= index < len(options):
            raise LookupError(f"no canned question at index {index}")
        return await self.submit(options[index].question, self.selected_category)
