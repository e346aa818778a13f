"""Testes para os métodos concretos do hAPI."""

from __future__ import annotations

import json
from urllib.parse import parse_qsl, urlsplit

import pytest

from api.connectors.hapi.errors import (
    ActionNotAllowedError,
    HapiErrorCode,
    InvalidParameterError,
    MethodParsingError,
    MissingRequiredParameterError,
)
from api.connectors.hapi.methods import (
    AuthkeysListMethod,
    AuthkeysReadMethod,
    EchoMethod,
    UsersContactsListMethod,
)
from api.connectors.hapi.response_types import AuthkeyResponse
from app.domain.contact import Contact
from app.domain.factory import CollectionFactory, ModelFactory
from config.settings import PORTAL_REFERENCE_APPLICATION


def _v15(payload: dict[str, object]) -> bytes:
    return json.dumps({"response": {"status": "ok", **payload}}).encode("utf-8")


class TestAuthkeysRead:
    def test_auth_request_flags(self) -> None:
        method = AuthkeysReadMethod({"username": "jdoe", "password": "pw"})
        assert method.is_auth_request is True
        assert method.admin_only is False
        assert method.get_auth() == "jdoe:pw"
        assert method.post_data["verbosity"] == "extended"

    def test_requires_username_and_password(self) -> None:
        with pytest.raises(MissingRequiredParameterError):
            AuthkeysReadMethod({"username": "jdoe"})

    def test_url_is_not_signed(self) -> None:
        url = AuthkeysReadMethod({"username": "u", "password": "p"}).get_url("h", None, None)
        query = dict(parse_qsl(urlsplit(url).query))
        assert query == {"method": "hapi.authkeys.read", "format": "json"}
        assert url.startswith("https://h/version/1.5/?")

    def test_url_requires_endpoint(self) -> None:
        with pytest.raises(InvalidParameterError):
            AuthkeysReadMethod({"username": "u", "password": "p"}).get_url("", None, None)

    def test_response_is_authkey(self) -> None:
        method = AuthkeysReadMethod({"username": "u", "password": "p"})
        method.set_response(_v15({"authkey": {"key": "k", "secret": "s", "user_type": "client"}}), "")
        response = method.get_response()
        assert isinstance(response, AuthkeyResponse)
        assert response.key == "k"
        assert response.secret == "s"
        assert response.model_extra == {"user_type": "client"}

    def test_missing_authkey_raises(self) -> None:
        method = AuthkeysReadMethod({"username": "u", "password": "p"})
        with pytest.raises(MethodParsingError):
            method.set_response(_v15({}), "")


class TestAuthkeysList:
    def test_not_allowed_outside_reference_application(self) -> None:
        with pytest.raises(ActionNotAllowedError) as exc_info:
            AuthkeysListMethod({"client_id": 1})
        assert exc_info.value.code == HapiErrorCode.ACTION_NOT_ALLOWED

    def test_requires_client_id(self) -> None:
        with pytest.raises(MissingRequiredParameterError):
            AuthkeysListMethod({}, application_name=PORTAL_REFERENCE_APPLICATION)

    def test_client_id_is_sent_as_customer_id(self) -> None:
        method = AuthkeysListMethod({"client_id": 1001}, application_name=PORTAL_REFERENCE_APPLICATION)
        assert method.post_data == {"customer_id": 1001}
        assert method.admin_only is True

    def test_returns_authkeys_or_empty_list(self) -> None:
        method = AuthkeysListMethod({"client_id": 1}, application_name=PORTAL_REFERENCE_APPLICATION)
        method.set_response(_v15({"authkeys": [{"key": "a"}]}), "")
        assert method.get_response() == [{"key": "a"}]

        empty = AuthkeysListMethod({"client_id": 1}, application_name=PORTAL_REFERENCE_APPLICATION)
        empty.set_response(_v15({}), "")
        assert empty.get_response() == []


class TestUsersContactsList:
    def test_wire_name_and_params(self) -> None:
        method = UsersContactsListMethod({"client_id": 1001, "verbosity": "full", "x": 1})
        assert method.method_name == "hapi.users.contacts.list"
        assert method.post_data == {"customer_id": 1001, "verbosity": "full"}

    def test_requires_customer_id(self) -> None:
        with pytest.raises(MissingRequiredParameterError):
            UsersContactsListMethod({"user_login": "jdoe"})

    def test_builds_contact_collection(self) -> None:
        model_factory = ModelFactory()
        method = UsersContactsListMethod({"customer_id": 1001})
        method.bind_factories(model_factory, CollectionFactory(model_factory))
        contacts = {"5": {"contact_id": "5", "login": "jdoe", "real_name": "J & D"}}
        method.set_response(_v15({"contacts": contacts}), "")

        result = method.get_response()
        assert isinstance(result["5"], Contact)
        assert result["5"].get("username") == "jdoe"
        assert result["5"].get("real_name") == "J &amp; D"


class TestEcho:
    def test_echo_returns_raw_structure(self) -> None:
        method = EchoMethod({"message": "hello"})
        assert method.admin_only is False
        assert method.post_data == {"message": "hello"}
        method.set_response(_v15({"message": "hello"}), "")
        assert method.get_response() == {"status": "ok", "message": "hello"}
