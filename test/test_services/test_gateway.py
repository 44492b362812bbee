import pytest
from typing import List

from emergency_chat.data.canned import EmergencyCategory
from emergency_chat.runtime.prompts import FALLBACK_REPLY, build_prompt
from emergency_chat.services.gateway import ReplyGateway, ReplyOutcome
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


def test_outcome_text_or_fallback():
    assert ReplyOutcome.success("hi").text_or_fallback() == "hi"
    assert ReplyOutcome.failure("boom").text_or_fallback() == FALLBACK_REPLY


@pytest.mark.asyncio
async def test_get_reply_builds_prompt_and_returns_text_verbatim():
    client = FakeGeminiClient(reply="  1. Get out.\n2. Call 101.  ")
    gateway = ReplyGateway(client)

    reply = await gateway.get_reply("Smoke in the hallway", EmergencyCategory.FIRE)

    assert reply == "  1. Get out.\n2. Call 101.  "
    assert client.prompts == [build_prompt("Smoke in the hallway", EmergencyCategory.FIRE)]


@pytest.mark.asyncio
async def test_get_reply_without_category_uses_plain_prompt():
    client = FakeGeminiClient()
    gateway = ReplyGateway(client)

    await gateway.get_reply("help")

    assert client.prompts == [gateway.build_prompt("help")]
    assert "Focus on the following category" not in client.prompts[0]


@pytest.mark.asyncio
async def test_get_reply_failure_returns_exact_fallback():
    gateway = ReplyGateway(FakeGeminiClient(error=GeminiError("Prompt blocked: SAFETY")))

    assert await gateway.get_reply("help") == FALLBACK_REPLY


@pytest.mark.asyncio
async def test_generate_reply_reports_success_and_failure():
    ok = await ReplyGateway(FakeGeminiClient(reply="T")).generate_reply("PROMPT")
    assert ok == ReplyOutcome(ok=True, text="T")

    bad = await ReplyGateway(FakeGeminiClient(error=GeminiError("HTTP 500: x"))).generate_reply("PROMPT")
    assert bad.ok is False
    assert bad.text is None
    assert "HTTP 500" in bad.reason


@pytest.mark.asyncio
async def test_gateway_without_client_and_key_falls_back(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assert await ReplyGateway().get_reply("help") == FALLBACK_REPLY
