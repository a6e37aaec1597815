"""OpenAI Responses API client for macro extraction."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from macromate.services.extraction import CompletionClient


@dataclass
class OpenAICompletionClient(CompletionClient):
    """Completion client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        *,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
        timeout: float = 30.0,
    ) -> "OpenAICompletionClient":
        """Create an OpenAI completion client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key, timeout=timeout),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def complete(self, prompt: str, image_data_url: str | None = None) -> str:
        """Send a prompt, optionally with an image, and return the raw reply."""
        content: list[dict[str, str]] = []
        if image_data_url is not None:
            content.append({"type": "input_image", "image_url": image_data_url})
        content.append({"type": "input_text", "text": prompt})
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": [{"role": "user", "content": content}],
            "store": self.store,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
