"""users.contacts.list - contatos do cliente atual."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from api.connectors.hapi.methods.base import AbstractMethod


class UsersContactsListMethod(AbstractMethod):
    method_name = "hapi.users.contacts.list"
    required_params = ("customer_id",)
    optional_params = ("user_login", "contact_id", "verbosity")

    def build_response(self, data: Any) -> None:
        contacts = data.get("contacts") if isinstance(data, Mapping) else None
        self.set_response_collection("contact", contacts)
