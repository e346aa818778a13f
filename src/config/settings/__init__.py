"""Agregador de settings do cliente hAPI."""

from __future__ import annotations

from config.settings.hapi import (
    DEFAULT_APPLICATION_NAME,
    DEFAULT_USER_AGENT,
    PORTAL_REFERENCE_APPLICATION,
    VALID_TLS_VERSIONS,
    HapiSettings,
    get_hapi_settings,
)

__all__ = [
    "DEFAULT_APPLICATION_NAME",
    "DEFAULT_USER_AGENT",
    "PORTAL_REFERENCE_APPLICATION",
    "VALID_TLS_VERSIONS",
    "HapiSettings",
    "get_hapi_settings",
]
