"""OpenAI Responses API client for room visualization."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from inner_garden.services.visualization import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Ask the model for a placement that matches ``schema``."""
        message = {
            "role": "user",
            "content": [
                {"type": "input_text", "text": prompt},
                {"type": "input_image", "image_url": image_data_url, "detail": "low"},
            ],
        }
        response = await self.client.responses.create(
            model=model,
            input=[message],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "room_placement",
                    "strict": True,
                    "schema": schema,
                }
            },
            store=store,
        )
        if not response.output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(response.output_text)

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP client."""
        await self.client.close()
