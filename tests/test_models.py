import json

import pytest
from pydantic import ValidationError

from cosmos_demo.models import CustomerDocument, ResponseDiagnostics


def _doc() -> CustomerDocument:
    return CustomerDocument(
        id="1",
        customer_id="1",
        title="Mr",
        first_name="Test",
        last_name="User",
        email_address="test@example.com",
        phone_number="123-456-7890",
        creation_date="2024-01-01T00:00:00+00:00",
    )


def test_json_round_trip_preserves_all_fields():
    doc = _doc()
    assert CustomerDocument.from_json(doc.to_json()) == doc


def test_body_uses_camel_case_field_names():
    body = _doc().to_body()
    assert body["customerId"] == "1"
    assert body["firstName"] == "Test"
    assert body["emailAddress"] == "test@example.com"
    assert "customer_id" not in body


def test_system_properties_are_dropped_on_read():
    body = json.loads(_doc().to_json())
    body.update({"_rid": "abc==", "_etag": '"0000"', "_ts": 1700000000})
    assert CustomerDocument.model_validate(body) == _doc()


def test_creation_date_defaults_to_now():
    doc = CustomerDocument(id="2", customer_id="2")
    assert doc.creation_date.endswith("+00:00")


def test_malformed_body_raises():
    with pytest.raises(ValidationError):
        CustomerDocument.from_json(b'{"id": "1"}')
    with pytest.raises(ValidationError):
        CustomerDocument.from_json(b"not json")


def test_diagnostics_from_headers():
    diag = ResponseDiagnostics.from_headers(
        201, {"x-ms-activity-id": "abc", "x-ms-request-charge": "5.71"}
    )
    assert diag.status_code == 201
    assert diag.activity_id == "abc"
    assert diag.request_charge == pytest.approx(5.71)


def test_diagnostics_tolerate_missing_headers():
    diag = ResponseDiagnostics.from_headers(204, None)
    assert diag.activity_id == ""
    assert diag.request_charge == 0.0
