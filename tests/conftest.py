"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from inner_garden.api.app import create_app
from inner_garden.config import Settings
from inner_garden.containers import AppContainer
from inner_garden.domain.artworks import ArtworkCollection
from inner_garden.domain.checkout import CheckoutSession
from inner_garden.domain.notifications import OutgoingEmail
from inner_garden.services.admin_sessions import AdminSessionService
from inner_garden.services.artworks import ArtworkRepository, ArtworkService
from inner_garden.services.checkout import CheckoutService, LineItem, PaymentClient
from inner_garden.services.notifications import (
    Mailer,
    NotificationService,
    WebhookClient,
)
from inner_garden.services.visualization import VisionClient, VisualizationService

ADMIN_EMAIL = "studio@example.com"
ADMIN_PASSWORD = "garden-secret"
ADMIN_TOKEN = "static-admin-token"


@dataclass
class InMemoryArtworkRepository(ArtworkRepository):
    """In-memory artwork repository for tests."""

    collection: ArtworkCollection = field(default_factory=ArtworkCollection)
    writes: int = 0

    def read(self) -> ArtworkCollection:
        return self.collection

    def write(self, collection: ArtworkCollection) -> ArtworkCollection:
        self.collection = collection
        self.writes += 1
        return collection


@dataclass
class FakeClock:
    """Clock that advances one second on every call."""

    current: datetime = field(
        default_factory=lambda: datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
    )
    step: timedelta = timedelta(seconds=1)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@dataclass
class FakeMailer(Mailer):
    """Mailer that records outgoing emails."""

    sent: list[OutgoingEmail] = field(default_factory=list)
    error: Exception | None = None

    async def send(self, email: OutgoingEmail) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(email)


@dataclass
class FakeWebhookClient(WebhookClient):
    """Webhook client that records payloads."""

    payloads: list[dict[str, object]] = field(default_factory=list)

    async def post(self, payload: dict[str, object]) -> None:
        self.payloads.append(payload)


@dataclass
class FakePaymentClient(PaymentClient):
    """Payment client returning a fixed checkout session."""

    calls: list[dict[str, object]] = field(default_factory=list)

    async def create_checkout_session(
        self,
        *,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
    ) -> CheckoutSession:
        self.calls.append({"line_items": line_items, "metadata": metadata})
        return CheckoutSession(id="cs_test_1", url="https://checkout.test/cs_test_1")


@dataclass
class FakeVisionClient(VisionClient):
    """Vision client returning a fixed placement."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "wall_detected": True,
            "x": 0.5,
            "y": 0.4,
            "width": 0.3,
            "notes": "Above the sofa",
        }
    )
    prompts: list[str] = field(default_factory=list)

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        return self.payload


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        artworks_path=tmp_path / "artworks.json",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        admin_token=ADMIN_TOKEN,
        smtp_user="mailer@example.com",
        smtp_pass="smtp-pass",
        stripe_secret_key="sk_test",
        openai_api_key="openai-key",
        consultation_webhook_url="https://hooks.example.com/lead",
    )


@pytest.fixture
def artwork_repository() -> InMemoryArtworkRepository:
    return InMemoryArtworkRepository()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def webhook_client() -> FakeWebhookClient:
    return FakeWebhookClient()


@pytest.fixture
def payment_client() -> FakePaymentClient:
    return FakePaymentClient()


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    artwork_repository: InMemoryArtworkRepository,
    clock: FakeClock,
    mailer: FakeMailer,
    webhook_client: FakeWebhookClient,
    payment_client: FakePaymentClient,
    vision_client: FakeVisionClient,
) -> AppContainer:
    artwork_service = ArtworkService(artwork_repository, clock=clock)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        artwork_service=artwork_service,
        admin_session_service=AdminSessionService(
            admin_email=ADMIN_EMAIL,
            admin_password=ADMIN_PASSWORD,
            admin_token=ADMIN_TOKEN,
        ),
        notification_service=NotificationService(
            mailer=mailer,
            studio_email=settings.notification_email,
            webhook_client=webhook_client,
        ),
        checkout_service=CheckoutService(
            artwork_service=artwork_service,
            client=payment_client,
            success_url="https://garden.test/success",
            cancel_url="https://garden.test/cancel",
        ),
        visualization_service=VisualizationService(
            client=vision_client, model="gpt-4.1-mini", store=False
        ),
        close_resources=close_resources,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    response = client.post(
        "/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    return {"Authorization": f"Bearer {response.json()['token']}"}
