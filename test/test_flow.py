# test/test_flow.py
import pytest
from typing import Any, Dict, List

from emergency_chat.data.canned import EmergencyCategory
from emergency_chat.runtime.flow import make_model_flow, make_reply_flow
from emergency_chat.runtime.prompts import FALLBACK_REPLY, build_prompt
from emergency_chat.services.gemini_client import GeminiError


# -----------------------------
# Fakes
# -----------------------------
class FakeGeminiClient:
    """Captures prompts and returns a deterministic reply, or raises."""

    def __init__(self, reply: str = "MOCK_REPLY", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


# -----------------------------
# Tests
# -----------------------------
@pytest.mark.asyncio
async def test_reply_flow_builds_prompt_and_calls_model():
    client = FakeGeminiClient(reply="Do not use elevators.")
    shared: Dict[str, Any] = {
        "user_text": "Fire on the 3rd floor",
        "category": EmergencyCategory.FIRE,
        "gemini_client": client,
    }

    action = await make_reply_flow().run_async(shared)

    assert action == "ok"
    assert shared["prompt"] == build_prompt("Fire on the 3rd floor", EmergencyCategory.FIRE)
    assert client.prompts == [shared["prompt"]]
    assert shared["assistant_reply"] == "Do not use elevators."
    assert shared["degraded"] is False


@pytest.mark.asyncio
async def test_reply_flow_failure_ends_with_fallback():
    client = FakeGeminiClient(error=GeminiError("Reply blocked by safety settings"))
    shared: Dict[str, Any] = {"user_text": "help", "gemini_client": client}

    action = await make_reply_flow().run_async(shared)

    assert action == "ok"
    assert shared["assistant_reply"] == FALLBACK_REPLY
    assert shared["degraded"] is True
    assert "safety" in shared["reply_error"]


@pytest.mark.asyncio
async def test_model_flow_skips_prompt_building():
    client = FakeGeminiClient()
    shared: Dict[str, Any] = {"prompt": "RAW PROMPT", "gemini_client": client}

    await make_model_flow().run_async(shared)

    assert client.prompts == ["RAW PROMPT"]
    assert shared["assistant_reply"] == "MOCK_REPLY"
