"""OpenAI chat completions client for menu extraction."""

from collections.abc import Callable
from dataclasses import dataclass

from openai import AsyncOpenAI

from menu_planner.services.menu import MenuTextClient

SYSTEM_PROMPT = (
    "You are a nutrition expert specializing in Indian cuisine and food analysis. "
    "Parse menu text accurately and provide detailed nutritional information. "
    "Return only valid JSON arrays."
)


def _default_client(api_key: str) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key)


@dataclass
class OpenAIMenuClient(MenuTextClient):
    """Menu client backed by OpenAI chat completions."""

    model: str
    client_factory: Callable[[str], AsyncOpenAI] = _default_client
    temperature: float = 0.3
    max_tokens: int = 2000
    provider: str = "openai"

    @classmethod
    def create(cls, model: str) -> "OpenAIMenuClient":
        """Create an OpenAI menu client."""
        return cls(model=model)

    async def complete(self, *, prompt: str, api_key: str) -> str:
        """Send the prompt and return the model's text."""
        client = self.client_factory(api_key)
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        finally:
            await client.close()
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise RuntimeError("OpenAI returned an empty response")
        return content
