"""
Tests for the Gemini reply node
"""
import pytest
from typing import Any, Dict, List
from pocketflow import AsyncFlow

from emergency_chat.runtime.nodes.gemini import GeminiReplyNode
from emergency_chat.runtime.prompts import FALLBACK_REPLY
from emergency_chat.services.gemini_client import GeminiError


class FakeGeminiClient:
    def __init__(self, reply: str = "MOCK_REPLY", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


async def _run(shared: Dict[str, Any]) -> str:
    node = GeminiReplyNode()
    node.successors = {}
    return await AsyncFlow(start=node).run_async(shared)


@pytest.mark.asyncio
async def test_gemini_node_success_passes_reply_through():
    client = FakeGeminiClient(reply="Leave the building now.\nCall 112.")
    shared: Dict[str, Any] = {"prompt": "PROMPT", "gemini_client": client}

    action = await _run(shared)

    assert action == "ok"
    assert client.prompts == ["PROMPT"]
    assert shared["assistant_reply"] == "Leave the building now.\nCall 112."
    assert shared["degraded"] is False
    assert shared["reply_error"] is None


@pytest.mark.asyncio
async def test_gemini_node_calls_model_once_then_falls_back():
    client = FakeGeminiClient(error=GeminiError("HTTP 503: unavailable"))
    shared: Dict[str, Any] = {"prompt": "PROMPT", "gemini_client": client}

    action = await _run(shared)

    assert action == "ok"
    # no retries
    assert len(client.prompts) == 1
    assert shared["assistant_reply"] == FALLBACK_REPLY
    assert shared["degraded"] is True
    assert "503" in shared["reply_error"]


@pytest.mark.asyncio
async def test_gemini_node_falls_back_on_unexpected_exception():
    client = FakeGeminiClient(error=KeyError("candidates"))
    shared: Dict[str, Any] = {"prompt": "PROMPT", "gemini_client": client}

    await _run(shared)

    assert shared["assistant_reply"] == FALLBACK_REPLY
    assert shared["degraded"] is True


@pytest.mark.asyncio
async def test_gemini_node_without_client_or_key_falls_back(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    shared: Dict[str, Any] = {"prompt": "PROMPT"}

    await _run(shared)

    assert shared["assistant_reply"] == FALLBACK_REPLY
    assert "GEMINI_API_KEY" in shared["reply_error"]
