"""Factory de wiring do cliente hAPI (bootstrap)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.connectors.hapi import (
    HapiClient,
    HapiCredentials,
    HttpxTransport,
    MethodRegistry,
)
from app.domain.factory import CollectionFactory, ModelFactory
from app.observability import LoggingEventSink
from app.protocols.transport import TlsOptions
from config.settings import get_hapi_settings

if TYPE_CHECKING:
    from app.protocols.telemetry import EventSinkProtocol
    from app.protocols.transport import HapiTransportProtocol
    from config.settings import HapiSettings


def create_method_registry(
    application_name: str,
    event_sink: EventSinkProtocol | None = None,
) -> MethodRegistry:
    """Cria o registro de métodos com as factories de models padrão."""
    model_factory = ModelFactory()
    return MethodRegistry(
        model_factory,
        CollectionFactory(model_factory),
        event_sink,
        application_name=application_name,
    )


def create_hapi_client(
    settings: HapiSettings | None = None,
    transport: HapiTransportProtocol | None = None,
    event_sink: EventSinkProtocol | None = None,
) -> HapiClient:
    """Cria HapiClient com dependências injetadas.

    Args:
        settings: Settings do hAPI (padrão: carregadas do ambiente)
        transport: Transporte alternativo (padrão: HttpxTransport)
        event_sink: Sink de telemetria (padrão: LoggingEventSink)
    """
    settings = settings or get_hapi_settings()
    event_sink = event_sink or LoggingEventSink()
    return HapiClient(
        endpoint=settings.endpoint,
        method_registry=create_method_registry(settings.application_name, event_sink),
        credentials=HapiCredentials(
            admin_key=settings.admin_key,
            admin_secret=settings.admin_secret,
            portal_key=settings.portal_key,
            portal_secret=settings.portal_secret,
        ),
        transport=transport or HttpxTransport(settings.request_timeout_seconds),
        event_sink=event_sink,
        tls=TlsOptions(
            tls_version=settings.tls_version or None,
            verify_peer=settings.verify_peer,
            verify_host=settings.verify_host,
        ),
        user_agent=settings.user_agent,
    )
