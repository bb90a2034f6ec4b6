# chefcam/clients/gemini.py
from __future__ import annotations

from typing import Any, Optional

from google import genai
from google.genai import types

from chefcam.core.config import DEFAULT_GEMINI_MODEL, Settings
from chefcam.services.image_prep import PreparedImage


def extract_text(resp: Any) -> str:
    """Return the answer text, falling back to the first non-empty text part."""
    top = getattr(resp, "text", None)
    if isinstance(top, str) and top.strip():
        return top
    for cand in getattr(resp, "candidates", None) or []:
        content = getattr(cand, "content", None)
        for part in getattr(content, "parts", None) or []:
            t = getattr(part, "text", None)
            if isinstance(t, str) and t.strip():
                return t
    return ""


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        temperature: float = 0.4,
        timeout_s: float = 60.0,
        client: Optional[genai.Client] = None,
    ):
        self.model = model
        self.temperature = temperature
        self._client = client or genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_s * 1000)),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        if not settings.gemini_api_key:
            raise RuntimeError("Server is missing GEMINI_API_KEY (or GOOGLE_API_KEY)")
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout_s=settings.gemini_timeout_s,
        )

    async def generate(self, prompt: str, image: PreparedImage) -> str:
        resp = await self._client.aio.models.generate_content(
            model=self.model,
            contents=[
                prompt,
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
            ],
            config=types.GenerateContentConfig(temperature=self.temperature),
        )
        return extract_text(resp)
