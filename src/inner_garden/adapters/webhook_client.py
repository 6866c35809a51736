"""Generic JSON webhook adapter."""

from dataclasses import dataclass

import httpx

from inner_garden.services.notifications import WebhookClient


@dataclass
class HttpxWebhookClient(WebhookClient):
    """Posts JSON payloads to a single webhook URL."""

    url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, url: str) -> "HttpxWebhookClient":
        """Create a webhook client with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient())

    async def post(self, payload: dict[str, object]) -> None:
        """Send the payload, following redirects as Apps Script requires."""
        response = await self.http_client.post(
            self.url, json=payload, timeout=10, follow_redirects=True
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
