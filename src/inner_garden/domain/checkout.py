"""Domain models for online payments."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckoutSession:
    """A hosted payment page created for an artwork."""

    id: str
    url: str
