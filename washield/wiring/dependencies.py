import logging

from fastapi import Request

from washield.application.exceptions import ProviderConfigError
from washield.application.ports.message_store import MessageStorePort
from washield.application.ports.messaging_provider import MessagingProviderPort
from washield.application.use_cases.create_message import CreateMessageUseCase
from washield.application.use_cases.handle_webhook_event import HandleWebhookEventUseCase
from washield.application.use_cases.send_message import SendMessageUseCase
from washield.core.config import Settings
from washield.infrastructure.whatsapp.mock_provider import MockWhatsAppProvider
from washield.infrastructure.whatsapp.whatsapp_client import WhatsAppClient


PROVIDER_SETTINGS = ("WHATSAPP_API_URL", "PHONE_NUMBER_ID", "WHATSAPP_ACCESS_TOKEN")


def build_whatsapp_provider(settings: Settings) -> MessagingProviderPort:
    logger = logging.getLogger(__name__)
    logger.info(
        "WHATSAPP_ACCESS_TOKEN present=%s len=%s",
        bool(settings.WHATSAPP_ACCESS_TOKEN),
        len(settings.WHATSAPP_ACCESS_TOKEN or ""),
    )
    logger.info("ENV=%s", settings.ENV)

    missing = [
        name
        for name in PROVIDER_SETTINGS
        if not getattr(settings, name)
    ]
    if missing:
        # A partial configuration is a mistake, not a request for the mock.
        if settings.is_dev() and len(missing) == len(PROVIDER_SETTINGS):
            logger.info("Using MockWhatsAppProvider (no provider settings, ENV=dev/local)")
            return MockWhatsAppProvider(verify_token=settings.WHATSAPP_WEBHOOK_VERIFY_TOKEN)
        raise ProviderConfigError(f"Missing {', '.join(missing)} environment variables")

    logger.info("Using real WhatsAppClient")
    return WhatsAppClient(
        base_url=settings.WHATSAPP_API_URL,
        phone_number_id=settings.PHONE_NUMBER_ID,
        access_token=settings.WHATSAPP_ACCESS_TOKEN,
        verify_token=settings.WHATSAPP_WEBHOOK_VERIFY_TOKEN,
        timeout=settings.WHATSAPP_TIMEOUT_SECONDS or None,
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_message_store(request: Request) -> MessageStorePort:
    return request.app.state.message_store


def get_whatsapp_provider(request: Request) -> MessagingProviderPort:
    state = request.app.state
    if state.provider is None:
        state.provider = build_whatsapp_provider(state.settings)
    return state.provider


def get_create_message_use_case(request: Request) -> CreateMessageUseCase:
    return CreateMessageUseCase(store=get_message_store(request))


def get_send_message_use_case(request: Request) -> SendMessageUseCase:
    return SendMessageUseCase(provider=get_whatsapp_provider(request))


def get_handle_webhook_event_use_case() -> HandleWebhookEventUseCase:
    return HandleWebhookEventUseCase()
