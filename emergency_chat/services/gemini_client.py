# services/gemini_client.py
import os
import httpx
from typing import Any, Dict, List, Optional


class ReplyUnavailable(RuntimeError):
    """The model could not produce a usable reply (network, auth, safety block, bad payload)."""


class GeminiError(ReplyUnavailable):
    pass


GENERATION_CONFIG: Dict[str, Any] = {
    "maxOutputTokens": 250,
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
}

SAFETY_SETTINGS: List[Dict[str, str]] = [
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_ONLY_HIGH"},
]


class GeminiClient:
    """Thin client for the Gemini generateContent REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url or os.getenv(
            "GEMINI_BASE", "https://generativelanguage.googleapis.com/v1beta"
        )
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        self.model = model or os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        self.timeout = timeout

        if not self.api_key:
            raise GeminiError("GEMINI_API_KEY is not configured")

        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=transport
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": dict(GENERATION_CONFIG),
            "safetySettings": [dict(s) for s in SAFETY_SETTINGS],
        }

    async def generate(self, prompt: str) -> str:
        """
        Single-shot, non-streaming generateContent call returning the reply text.
        Raises GeminiError on any failure, including safety blocks and empty text.
        """
        try:
            res = await self._client.post(
                f"/models/{self.model}:generateContent",
                params={"key": self.api_key},
                json=self.build_payload(prompt),
            )
        except httpx.HTTPError as e:
            raise GeminiError(f"Gemini request failed: {type(e).__name__}: {e}") from e

        if res.status_code >= 400:
            raise GeminiError(f"HTTP {res.status_code}: {res.text[:200]}")

        try:
            data = res.json()
        except ValueError as e:
            raise GeminiError(f"Malformed response body: {res.text[:200]}") from e
        return self._extract_text(data)

    @staticmethod
    def _extract_text(data: Any) -> str:
        if not isinstance(data, dict):
            raise GeminiError(f"Unexpected response: {data!r}")

        feedback = data.get("promptFeedback") or {}
        if not isinstance(feedback, dict):
            raise GeminiError(f"Malformed promptFeedback: {feedback!r}")
        if feedback.get("blockReason"):
            raise GeminiError(f"Prompt blocked: {feedback['blockReason']}")

        candidates = data.get("candidates") or []
        if not isinstance(candidates, list) or not candidates:
            raise GeminiError(f"Empty candidates: {data!r}")
        candidate = candidates[0]
        if not isinstance(candidate, dict):
            raise GeminiError(f"Malformed candidate: {candidate!r}")
        if candidate.get("finishReason") == "SAFETY":
            raise GeminiError("Reply blocked by safety settings")

        content = candidate.get("content") or {}
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            raise GeminiError(f"Malformed content: {candidate!r}")

        texts: List[str] = []
        for p in parts:
            if not isinstance(p, dict) or not isinstance(p.get("text", ""), str):
                raise GeminiError(f"Malformed part: {p!r}")
            texts.append(p.get("text", ""))
        text = "".join(texts)
        if not text.strip():
            raise GeminiError(f"Empty reply text: {candidate!r}")
        return text
