import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from emergency_chat.api import categories, chat
from emergency_chat.config import get_settings
from emergency_chat.runtime.prompts import GREETING
from emergency_chat.runtime.sessions import SessionRegistry
from emergency_chat.services.gateway import ReplyGateway
from emergency_chat.services.gemini_client import GeminiClient

settings = get_settings()

logging.basicConfig(level=settings.log_level, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("emergency_chat")


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = None
    if settings.gemini_api_key:
        client = GeminiClient(
            base_url=settings.gemini_base,
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout=settings.gemini_timeout,
        )
    else:
        # every reply will be the fallback until a key is configured
        logger.warning("GEMINI_API_KEY is not set")
    logger.info("Config: model=%s key_set=%s", settings.gemini_model, client is not None)

    app.state.registry = SessionRegistry(
        ReplyGateway(client),
        greeting=GREETING if settings.greeting else None,
    )
    try:
        yield
    finally:
        if client is not None:
            await client.aclose()


app = FastAPI(title="Emergency Response Chat API", lifespan=lifespan)

if settings.is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(chat.router)
app.include_router(categories.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
