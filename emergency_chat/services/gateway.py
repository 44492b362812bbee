# services/gateway.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from emergency_chat.data.canned import EmergencyCategory
from emergency_chat.runtime.flow import make_model_flow, make_reply_flow
from emergency_chat.runtime.prompts import FALLBACK_REPLY, build_prompt
from emergency_chat.services.gemini_client import GeminiClient

Category = Optional[Union[EmergencyCategory, str]]


@dataclass(frozen=True)
class ReplyOutcome:
    """Result of one model call: either text or a failure reason."""

    ok: bool
    text: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "ReplyOutcome":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, reason: str) -> "ReplyOutcome":
        return cls(ok=False, reason=reason)

    def text_or_fallback(self) -> str:
        return self.text if self.ok and self.text is not None else FALLBACK_REPLY


class ReplyGateway:
    """Turns user text into a model prompt and a reply, or the fallback string.

    The client is optional; without one each call opens and closes its own
    GeminiClient (which fails, and therefore falls back, when no key is set).
    """

    def __init__(self, client: Optional[GeminiClient] = None) -> None:
        self.client = client

    def build_prompt(self, user_text: str, category: Category = None) -> str:
        return build_prompt(user_text, category)

    def _shared(self, **extra: Any) -> Dict[str, Any]:
        shared: Dict[str, Any] = {"gemini_client": self.client}
        shared.update(extra)
        return shared

    @staticmethod
    def _outcome(shared: Dict[str, Any]) -> ReplyOutcome:
        if shared.get("degraded"):
            return ReplyOutcome.failure(shared.get("reply_error") or "unknown error")
        return ReplyOutcome.success(shared["assistant_reply"])

    async def generate_reply(self, prompt: str) -> ReplyOutcome:
        """Single model call for an already built prompt. Never raises."""
        shared = self._shared(prompt=prompt)
        await make_model_flow().run_async(shared)
        return self._outcome(shared)

    async def get_reply(self, user_text: str, category: Category = None) -> str:
        """Prompt + model call; the fixed fallback string on any failure."""
        shared = self._shared(user_text=user_text, category=category)
        await make_reply_flow().run_async(shared)
        return self._outcome(shared).text_or_fallback()
