"""CRM error family — statuses and the JSON envelope."""

import pytest

from artist_crm.core.errors import (
    BusinessRuleError, ConflictError, DatabaseError, ErrorContext,
    OutlookAPIError, OutlookNotConnectedError, ResourceNotFoundError,
    UploadRejectedError,
)


@pytest.mark.parametrize("error, status", [
    (ResourceNotFoundError("Artist", "42"), 404),
    (BusinessRuleError("nope"), 400),
    (UploadRejectedError("too big", "file_size"), 400),
    (ConflictError("dup"), 409),
    (DatabaseError("down", "execute"), 503),
    (OutlookNotConnectedError(), 503),
    (OutlookAPIError("boom", "client_error", status_code=404), 502),
])
def test_http_status(error, status):
    assert error.http_status == status


def test_not_found_envelope_names_the_record():
    body = ResourceNotFoundError("Artist", "42").to_response()["error"]

    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Artist '42' not found"
    assert body["category"] == "resource_not_found"
    assert body["context"]["entity"] == "Artist"
    assert body["context"]["entity_id"] == "42"


def test_outlook_error_keeps_retry_hint_and_entity():
    error = OutlookAPIError(
        "slow down", "rate_limit", status_code=429, retry_after_ms=3000,
        context=ErrorContext(entity="OutlookMessage", entity_id="m1"),
    )

    ctx = error.to_response()["error"]["context"]
    assert ctx == {"entity": "OutlookMessage", "entity_id": "m1", "retry_after_ms": 3000}
    assert error.api_error_type == "rate_limit"
