# runtime/nodes/gemini.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from pocketflow import AsyncNode

from emergency_chat.runtime.prompts import FALLBACK_REPLY
from emergency_chat.services.gemini_client import GeminiClient

logger = logging.getLogger(__name__)


class GeminiReplyNode(AsyncNode):
    """One generateContent call per user turn.
    - prep_async: take the built prompt and resolve the client (injectable via shared)
    - exec_async: call the model, no retries
    - exec_fallback_async: any failure becomes the fixed fallback reply
    - post_async: write reply and outcome flags back to shared
    """

    def __init__(self, **kwargs: Any) -> None:
        # a single attempt: failures go straight to the fallback
        kwargs.setdefault("max_retries", 1)
        super().__init__(**kwargs)

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "prompt": str(shared.get("prompt") or ""),
            "client": shared.get("gemini_client"),
        }

    async def exec_async(self, prep: Dict[str, Any]) -> Dict[str, Any]:
        client: Optional[GeminiClient] = prep["client"]
        if client is not None:
            return {"reply": await client.generate(prep["prompt"])}

        # No shared client: short-lived one, closed after the call.
        client = GeminiClient()
        try:
            return {"reply": await client.generate(prep["prompt"])}
        finally:
            await client.aclose()

    async def exec_fallback_async(self, prep: Dict[str, Any], exc: Exception) -> Dict[str, Any]:
        logger.warning("Gemini reply unavailable, using fallback: %s", exc)
        return {
            "reply": FALLBACK_REPLY,
            "error": str(exc) or type(exc).__name__,
            "degraded": True,
        }

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: Dict[str, Any]) -> str:
        shared["assistant_reply"] = exec_res["reply"]
        shared["degraded"] = bool(exec_res.get("degraded"))
        shared["reply_error"] = exec_res.get("error")
        return "ok"
