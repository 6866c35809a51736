"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from inner_garden.adapters.json_artwork_repository import JsonArtworkRepository
from inner_garden.adapters.openai_vision_client import OpenAIVisionClient
from inner_garden.adapters.smtp_mailer import SmtpMailer
from inner_garden.adapters.stripe_client import HttpxStripeClient
from inner_garden.adapters.webhook_client import HttpxWebhookClient
from inner_garden.config import Settings
from inner_garden.services.admin_sessions import AdminSessionService
from inner_garden.services.artworks import ArtworkService
from inner_garden.services.checkout import CheckoutService
from inner_garden.services.notifications import NotificationService
from inner_garden.services.visualization import VisualizationService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    artwork_service: ArtworkService
    admin_session_service: AdminSessionService
    notification_service: NotificationService
    checkout_service: CheckoutService
    visualization_service: VisualizationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    Optional integrations (SMTP, Stripe, OpenAI, webhook) are only wired when
    their credentials are configured; services report them as disabled
    otherwise.
    """
    resolved_settings = settings or Settings()
    artwork_repository = JsonArtworkRepository(resolved_settings.artworks_path)
    artwork_service = ArtworkService(artwork_repository)
    admin_session_service = AdminSessionService(
        admin_email=resolved_settings.admin_email,
        admin_password=resolved_settings.admin_password,
        admin_token=resolved_settings.admin_token,
        ttl=timedelta(hours=resolved_settings.admin_session_ttl_hours),
        max_sessions=resolved_settings.admin_max_sessions,
    )

    mailer = None
    if resolved_settings.smtp_user:
        mailer = SmtpMailer(
            host=resolved_settings.smtp_host,
            port=resolved_settings.smtp_port,
            username=resolved_settings.smtp_user,
            password=resolved_settings.smtp_pass,
            sender=resolved_settings.smtp_user,
        )
    webhook_client = None
    if resolved_settings.consultation_webhook_url:
        webhook_client = HttpxWebhookClient.create(
            resolved_settings.consultation_webhook_url
        )
    notification_service = NotificationService(
        mailer=mailer,
        studio_email=resolved_settings.notification_email,
        webhook_client=webhook_client,
    )

    stripe_client = None
    if resolved_settings.stripe_secret_key:
        stripe_client = HttpxStripeClient.create(
            secret_key=resolved_settings.stripe_secret_key,
            base_url=resolved_settings.stripe_api_base,
        )
    checkout_service = CheckoutService(
        artwork_service=artwork_service,
        client=stripe_client,
        success_url=resolved_settings.stripe_success_url,
        cancel_url=resolved_settings.stripe_cancel_url,
    )

    vision_client = None
    if resolved_settings.openai_api_key:
        vision_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
    visualization_service = VisualizationService(
        client=vision_client,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        for client in (webhook_client, stripe_client, vision_client):
            if client is not None:
                await client.close()

    return AppContainer(
        settings=resolved_settings,
        artwork_service=artwork_service,
        admin_session_service=admin_session_service,
        notification_service=notification_service,
        checkout_service=checkout_service,
        visualization_service=visualization_service,
        close_resources=close_resources,
    )
