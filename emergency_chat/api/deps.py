from fastapi import Request
from emergency_chat.runtime.sessions import SessionRegistry


def get_registry(request: Request) -> SessionRegistry:
    """Registry created in the app lifespan; overridden in tests."""
    return request.app.state.registry
