"""Request models for the public and admin HTTP API."""

from pydantic import BaseModel

from inner_garden.domain.errors import ValidationError
from inner_garden.services.notifications import ConsultationDetails, OrderDetails


class AdminLoginRequest(BaseModel):
    """Admin login form."""

    email: str = ""
    password: str = ""


class OrderRequest(BaseModel):
    """Artwork order form submitted from the gallery."""

    artwork: str | None = None
    price: str | int | float | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    country: str | None = None
    frame: str | None = None
    message: str | None = None

    def to_details(self) -> OrderDetails:
        """Validate required fields and return trimmed order details."""
        artwork, name, email = (
            _clean(self.artwork),
            _clean(self.name),
            _clean(self.email),
        )
        if not artwork or not name or not email:
            raise ValidationError("Required fields: artwork, name, email")
        return OrderDetails(
            artwork=artwork,
            name=name,
            email=email,
            price=_clean(None if self.price is None else str(self.price)),
            phone=_clean(self.phone),
            country=_clean(self.country),
            frame=_clean(self.frame),
            message=_clean(self.message),
        )


class ConsultationRequest(BaseModel):
    """Consultation booking form."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    message: str | None = None
    preferred_date: str | None = None
    artwork: str | None = None

    def to_details(self) -> ConsultationDetails:
        """Validate required fields and return trimmed consultation details."""
        name = _clean(self.name)
        email, phone = _clean(self.email), _clean(self.phone)
        if not name or not (email or phone):
            raise ValidationError("Required fields: name and email or phone")
        return ConsultationDetails(
            name=name,
            email=email,
            phone=phone,
            message=_clean(self.message),
            preferred_date=_clean(self.preferred_date),
            artwork=_clean(self.artwork),
        )


class CheckoutRequest(BaseModel):
    """Request to start online payment for an artwork."""

    artwork_id: str
    frame: str | None = None


class VisualizeRequest(BaseModel):
    """Room photo plus the artwork to place in it."""

    artwork_id: str
    image: str


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
