"""
Pydantic models — the customer document and per-request diagnostics.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class CustomerDocument(BaseModel):
    """One customer record as stored in the container.

    Attribute names are snake_case; the JSON field names are the camelCase
    aliases. Cosmos system properties (_rid, _etag, _ts ...) are dropped on
    read.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    customer_id: str = Field(alias="customerId")  # partition key value
    title: str = ""
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email_address: str = Field(default="", alias="emailAddress")
    phone_number: str = Field(default="", alias="phoneNumber")
    creation_date: str = Field(default_factory=_utc_now, alias="creationDate")

    def to_body(self) -> dict[str, Any]:
        """JSON-compatible dict using the stored field names."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, data: str | bytes) -> CustomerDocument:
        return cls.model_validate_json(data)


class ResponseDiagnostics(BaseModel):
    """Diagnostic metadata returned with each Cosmos response. Logging only."""

    status_code: int
    activity_id: str = ""
    request_charge: float = 0.0

    @classmethod
    def from_headers(cls, status_code: int, headers: Mapping[str, str] | None) -> ResponseDiagnostics:
        headers = headers or {}
        try:
            charge = float(headers.get("x-ms-request-charge") or 0.0)
        except ValueError:
            charge = 0.0
        return cls(
            status_code=int(status_code),
            activity_id=headers.get("x-ms-activity-id", ""),
            request_charge=charge,
        )
