import pytest

from emergency_chat.runtime.prompts import GREETING
from emergency_chat.runtime.sessions import SessionRegistry


class EchoGateway:
    async def get_reply(self, user_text, category=None):
        return f"echo: {user_text}"


def test_registry_returns_same_store_per_session():
    registry = SessionRegistry(EchoGateway())
    a = registry.get("a")
    assert registry.get("a") is a
    assert "a" in registry
    assert len(registry) == 1


@pytest.mark.asyncio
async def test_sessions_do_not_share_conversations():
    registry = SessionRegistry(EchoGateway())

    await registry.get("a").submit("fire!")

    assert [m.text for m in registry.get("a").messages] == [GREETING, "fire!", "echo: fire!"]
    assert [m.text for m in registry.get("b").messages] == [GREETING]


def test_drop_forgets_session():
    registry = SessionRegistry(EchoGateway(), greeting=None)
    registry.get("a")
    assert registry.drop("a") is True
    assert registry.drop("a") is False
    assert registry.get("a").messages == ()


def test_peek_does_not_create():
    registry = SessionRegistry(EchoGateway())
    assert registry.peek("a") is None
    assert len(registry) == 0
    store = registry.get("a")
    assert registry.peek("a") is store
