"""Gemini REST client for menu extraction."""

import logging
from dataclasses import dataclass

import httpx

from menu_planner.services.menu import MenuTextClient

_logger = logging.getLogger(__name__)

_RECOVERABLE_ERRORS = (httpx.HTTPError, RuntimeError, ValueError)


@dataclass
class HttpxGeminiMenuClient(MenuTextClient):
    """HTTPX-backed Gemini client that tries each configured model in order."""

    base_url: str
    models: tuple[str, ...]
    http_client: httpx.AsyncClient
    provider: str = "gemini"

    @classmethod
    def create(
        cls, base_url: str, models: tuple[str, ...]
    ) -> "HttpxGeminiMenuClient":
        """Create a Gemini client with a managed httpx session."""
        return cls(base_url=base_url, models=models, http_client=httpx.AsyncClient())

    async def complete(self, *, prompt: str, api_key: str) -> str:
        """Return the first model's text; raise the last error if all fail."""
        last_error: Exception | None = None
        for model in self.models:
            try:
                return await self._generate(model, prompt, api_key)
            except _RECOVERABLE_ERRORS as exc:
                _logger.warning(
                    "Gemini model %s failed: %s (status=%s)",
                    model,
                    type(exc).__name__,
                    _status_code(exc),
                )
                last_error = exc
        if last_error is None:
            raise RuntimeError("No Gemini models configured")
        raise last_error

    async def _generate(self, model: str, prompt: str, api_key: str) -> str:
        response = await self.http_client.post(
            f"{self.base_url}/models/{model}:generateContent",
            headers={"x-goog-api-key": api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
            timeout=30,
        )
        response.raise_for_status()
        return _extract_text(response.json())

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _extract_text(payload: object) -> str:
    candidates = payload.get("candidates") if isinstance(payload, dict) else None
    first = candidates[0] if isinstance(candidates, list) and candidates else None
    if isinstance(first, dict):
        content = first.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if isinstance(parts, list) and parts and isinstance(parts[0], dict):
            text = parts[0].get("text")
            if text:
                return str(text)
    raise RuntimeError("No response text from Gemini")


def _status_code(exc: Exception) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return str(exc.response.status_code)
    return "n/a"
