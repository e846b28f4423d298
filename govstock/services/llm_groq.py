# govstock/services/llm_groq.py
import logging
import os
from typing import Protocol

from groq import AsyncGroq, GroqError

from govstock.exceptions import TransportError

logger = logging.getLogger(__name__)


class QueryClient(Protocol):
    async def generate(self, prompt: str) -> str: ...


class GroqQueryClient:
    """
    Single-prompt text generation over Groq chat completions.

    Build one at process start and pass it around; it holds the HTTP
    connection pool.
    """

    def __init__(self, api_key: str | None = None, model: str | None = None, **kwargs):
        self._client = AsyncGroq(api_key=api_key or os.environ.get("GROQ_API_KEY"))
        self.model = model or os.environ.get("GROQ_MODEL", "llama-3.3-70b-versatile")
        self.temperature = float(kwargs.get("temperature", os.getenv("GROQ_TEMPERATURE", "0.2")))
        self.max_tokens = int(kwargs.get("max_tokens", os.getenv("GROQ_MAX_TOKENS", "600")))
        self.top_p = float(kwargs.get("top_p", 0.9))

    async def generate(self, prompt: str) -> str:
        messages = [{"role": "user", "content": prompt}]
        try:
            resp = await self._client.chat.completions.create(
                model=self.model, messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                top_p=self.top_p,
                stream=False,
            )
        except GroqError as e:
            logger.error("Groq request failed (model=%s): %s", self.model, e)
            raise TransportError(f"Model request failed: {e}") from e
        if not resp.choices:
            return ""
        return (resp.choices[0].message.content or "").strip()

    async def aclose(self) -> None:
        await self._client.close()
