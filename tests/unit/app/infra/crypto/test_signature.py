"""Testes para a assinatura api_sig."""

from __future__ import annotations

import hashlib

from app.infra.crypto import compute_signature


def test_signature_sorts_keys_and_concatenates() -> None:
    params = {"method": "test.echo", "format": "json", "key": "k"}
    expected = hashlib.md5(b"s3cretformatjsonkeykmethodtest.echo").hexdigest()
    assert compute_signature("s3cret", params) == expected


def test_signature_is_order_independent() -> None:
    first = compute_signature("s", {"b": "2", "a": "1"})
    second = compute_signature("s", {"a": "1", "b": "2"})
    assert first == second


def test_signature_depends_on_secret() -> None:
    params = {"a": "1"}
    assert compute_signature("one", params) != compute_signature("two", params)


def test_signature_of_empty_params() -> None:
    assert compute_signature("s", {}) == hashlib.md5(b"s").hexdigest()


def test_signature_is_deterministic() -> None:
    params = {"method": "test.echo", "timestamp": "2013-03-05T21:14:16+0000"}
    assert compute_signature("s", params) == compute_signature("s", dict(params))


def test_changing_any_single_value_changes_signature() -> None:
    params = {"customer_id": "1001", "format": "json", "method": "users.contacts.list"}
    baseline = compute_signature("s", params)
    for name in params:
        changed = {**params, name: params[name] + "x"}
        assert compute_signature("s", changed) != baseline, name
