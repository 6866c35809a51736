"""Stripe Checkout adapter over the REST API."""

from dataclasses import dataclass

import httpx

from inner_garden.domain.checkout import CheckoutSession
from inner_garden.services.checkout import LineItem, PaymentClient


@dataclass
class HttpxStripeClient(PaymentClient):
    """Creates Stripe Checkout sessions with form-encoded requests."""

    secret_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, secret_key: str, base_url: str) -> "HttpxStripeClient":
        """Create a Stripe client with a managed httpx session."""
        return cls(
            secret_key=secret_key, base_url=base_url, http_client=httpx.AsyncClient()
        )

    async def create_checkout_session(
        self,
        *,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
    ) -> CheckoutSession:
        """Create a payment-mode checkout session."""
        form: dict[str, str] = {
            "mode": "payment",
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        for index, item in enumerate(line_items):
            prefix = f"line_items[{index}]"
            form[f"{prefix}[quantity]"] = str(item.quantity)
            form[f"{prefix}[price_data][currency]"] = item.currency
            form[f"{prefix}[price_data][unit_amount]"] = str(item.unit_amount)
            form[f"{prefix}[price_data][product_data][name]"] = item.name
        for key, value in metadata.items():
            form[f"metadata[{key}]"] = value

        response = await self.http_client.post(
            f"{self.base_url}/v1/checkout/sessions",
            data=form,
            auth=(self.secret_key, ""),
            timeout=15,
        )
        response.raise_for_status()
        payload = response.json()
        return CheckoutSession(id=payload["id"], url=payload["url"])

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
