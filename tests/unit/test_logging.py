"""
Name: JSON Logging Tests

Responsibilities:
  - Request context is merged into every record
  - Sensitive keys are redacted (secrets and checkout PII)
"""

import json
import logging

import pytest

from storefront.context import clear_context, set_identity_context, set_request_context
from storefront.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="storefront",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_context_is_included():
    set_request_context(request_id="req-1", method="GET", path="/api/orders")
    set_identity_context(user_id="user-1")
    try:
        payload = json.loads(JSONFormatter().format(_record()))
    finally:
        clear_context()

    assert payload["message"] == "hello"
    assert payload["request_id"] == "req-1"
    assert payload["path"] == "/api/orders"
    assert payload["user_id"] == "user-1"


def test_sensitive_keys_are_redacted():
    payload = json.loads(
        JSONFormatter().format(
            _record(password="hunter2", authorization="Bearer abc", order_id="o-1")
        )
    )

    assert payload["password"] == "***REDACTADO***"
    assert payload["authorization"] == "***REDACTADO***"
    assert payload["order_id"] == "o-1"


def test_checkout_pii_and_token_like_keys_are_redacted():
    payload = json.loads(
        JSONFormatter().format(
            _record(
                phone="5551234",
                shipping_address="Calle Falsa 123",
                refresh_token="abc",
                password_hash="$argon2id$...",
                items=2,
            )
        )
    )

    assert payload["phone"] == "***REDACTADO***"
    assert payload["shipping_address"] == "***REDACTADO***"
    assert payload["refresh_token"] == "***REDACTADO***"
    assert payload["password_hash"] == "***REDACTADO***"
    assert payload["items"] == 2
    assert payload["service"] == "storefront"
