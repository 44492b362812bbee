# runtime/flow.py
from __future__ import annotations

from pocketflow import AsyncFlow
from emergency_chat.runtime.nodes.prompt import PromptBuildNode
from emergency_chat.runtime.nodes.gemini import GeminiReplyNode


def make_reply_flow() -> AsyncFlow:
    """Emergency reply flow:
    prompt_build → gemini_reply (→ fallback reply on any failure)
    """
    prompt_build = PromptBuildNode()
    gemini_reply = GeminiReplyNode()

    prompt_build.successors = {"ok": gemini_reply}
    gemini_reply.successors = {}

    return AsyncFlow(start=prompt_build)


def make_model_flow() -> AsyncFlow:
    """Model call only, for callers that already hold a built prompt."""
    gemini_reply = GeminiReplyNode()
    gemini_reply.successors = {}
    return AsyncFlow(start=gemini_reply)
