"""Contact - contato de um cliente, vindo de users.contacts.list."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from app.domain.model import AbstractModel


class Contact(AbstractModel):
    """Contato (superusuário ou subusuário) de um cliente."""

    AGILE_CUSTOMER = 0
    COLO_CUSTOMER = 1
    CLOUDY_COLO_CUSTOMER = 2

    _defaults = MappingProxyType(
        {
            # Preenchidos pela listagem de contatos
            "super_contact_id": 0,
            "contact_id": 0,
            "client_id": 0,
            "username": None,
            "real_name": None,
            "email_name": None,
            "email_domain": None,
            "description": None,
            "phone": None,
            "prefer_lang": None,
            "audit_tickets": None,
            "rwhois_contact": None,
            "listed_company": None,
            "email": None,
            "first": None,
            "last": None,
            "access": [],
            "client_access": [],
            "permission_groups": [],
            "is_lead": False,
            # hapi.authkeys.read
            "key": None,
            "secret": None,
            "user_type": None,
            # client.get (com metadata)
            "default_payment_method_id": 0,
            "is_labs": False,
            "portal_demo": False,
            "colo_plus": 0,
            "managed": "",
            "is_agile": False,
            # Sessão do portal
            "remember_me": False,
            "login_timestamp": 0,
            "password_checked_timestamp": 0,
            "heartbeat_timestamp": 0,
        }
    )

    # campo recebido -> propriedade do model
    _hydrator = MappingProxyType(
        {
            "contact_id": "contact_id",
            "email": "email",
            "email_name": "email_name",
            "email_domain": "email_domain",
            "listed_company": "listed_company",
            "real_name": "real_name",
            "first": "first",
            "access": "access",
            "rwhois_contact": "rwhois_contact",
            "last": "last",
            "client_id": "client_id",
            "description": "description",
            "phone": "phone",
            "login": "username",
            "audit_tickets": "audit_tickets",
            "prefer_lang": "prefer_lang",
        }
    )

    def get_auth_info(self) -> dict[str, Any]:
        """Mínimo necessário para recarregar um cliente hAPI autenticado."""
        return {
            "client_id": self._data["client_id"],
            "username": self._data["username"],
            "usertype": self._data["user_type"],
            "hapi_key": self._data["key"],
            "hapi_secret": self._data["secret"],
            "persist": self._data["remember_me"],
            "timestamp": self._data["login_timestamp"],
            "timestamp_checked": self._data["password_checked_timestamp"],
        }

    @property
    def client_id(self) -> Any:
        return self._data["client_id"]

    @property
    def contact_id(self) -> Any:
        return self._data["contact_id"]

    @property
    def user_id(self) -> Any:
        """contact_id == -1 indica superusuário."""
        if self._data["contact_id"] == -1:
            return self._data["super_contact_id"]
        return self._data["contact_id"]

    @property
    def hapi_key(self) -> Any:
        return self._data["key"]

    @property
    def hapi_secret(self) -> Any:
        return self._data["secret"]
