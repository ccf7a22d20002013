"""
MockDocumentStore — in-memory document store for offline runs and tests.

Accepts and ignores the client factory args so it satisfies the same
constructor signature as CosmosDocumentStore. Duplicate creates are logged
and ignored; missing items raise the SDK's own 404 exception.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from azure.cosmos.exceptions import CosmosResourceNotFoundError

from cosmos_demo.errors import check_partition_key
from cosmos_demo.models import CustomerDocument, ResponseDiagnostics

logger = logging.getLogger("cosmos-demo.store")


class MockDocumentStore:
    """In-memory document store keyed by (partition key, id)."""

    def __init__(
        self,
        db_name: str = "",
        container_name: str = "",
        pk_path: str = "",
        *,
        client: Any = None,
        ensure_created: bool = False,
    ):
        self._items: dict[tuple[str, str], dict[str, Any]] = {}

    def create_document(
        self, partition_key_value: str, document: CustomerDocument,
    ) -> ResponseDiagnostics | None:
        check_partition_key(partition_key_value, document.customer_id)
        key = (partition_key_value, document.id)
        if key in self._items:
            logger.info("Item with partition key value %s already exists", partition_key_value)
            return None
        self._items[key] = document.to_body()
        return ResponseDiagnostics.from_headers(HTTPStatus.CREATED, None)

    def read_document(self, partition_key_value: str, document_id: str) -> CustomerDocument:
        body = self._items.get((partition_key_value, document_id))
        if body is None:
            raise CosmosResourceNotFoundError(
                status_code=HTTPStatus.NOT_FOUND,
                message=f"Entity with the specified id does not exist: {document_id}",
            )
        return CustomerDocument.model_validate(body)

    def delete_document(self, partition_key_value: str, document_id: str) -> ResponseDiagnostics:
        if self._items.pop((partition_key_value, document_id), None) is None:
            raise CosmosResourceNotFoundError(
                status_code=HTTPStatus.NOT_FOUND,
                message=f"Entity with the specified id does not exist: {document_id}",
            )
        return ResponseDiagnostics.from_headers(HTTPStatus.NO_CONTENT, None)
