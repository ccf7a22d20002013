"""
CosmosDocumentStore — Cosmos DB NoSQL implementation of DocumentStore.

Wraps a ContainerProxy from cosmos_helpers and the SDK's synchronous
item methods. Every call is one blocking request/response exchange; the
SDK's own retry policy applies.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from azure.cosmos import CosmosClient
from azure.cosmos.exceptions import CosmosHttpResponseError

from cosmos_demo.cosmos_helpers import capture_headers, ensure_container, ensure_database, get_container
from cosmos_demo.errors import check_partition_key, is_conflict
from cosmos_demo.models import CustomerDocument, ResponseDiagnostics

logger = logging.getLogger("cosmos-demo.store")


class CosmosDocumentStore:
    """Cosmos NoSQL implementation of DocumentStore."""

    def __init__(
        self,
        db_name: str,
        container_name: str,
        pk_path: str,
        *,
        client: Any = None,
        ensure_created: bool = False,
    ):
        if client is None:
            raise ValueError("CosmosDocumentStore requires a CosmosClient")
        if ensure_created:
            ensure_database(client, db_name)
            self._container = ensure_container(client, db_name, container_name, pk_path)
        else:
            self._container = get_container(client, db_name, container_name)
        self._container_name = container_name

    def create_document(
        self, partition_key_value: str, document: CustomerDocument,
    ) -> ResponseDiagnostics | None:
        check_partition_key(partition_key_value, document.customer_id)
        body = document.to_body()
        logger.debug("Creating item %s in [%s]", document.id, self._container_name)

        headers: dict[str, str] = {}
        try:
            self._container.create_item(body=body, response_hook=capture_headers(headers))
        except CosmosHttpResponseError as e:
            if not is_conflict(e):
                raise
            logger.info("Item with partition key value %s already exists", partition_key_value)
            return None

        diag = ResponseDiagnostics.from_headers(HTTPStatus.CREATED, headers)
        logger.info(
            "Status %d. Item %s created. ActivityId %s. Consuming %s Request Units.",
            diag.status_code, partition_key_value, diag.activity_id, diag.request_charge,
        )
        return diag

    def read_document(self, partition_key_value: str, document_id: str) -> CustomerDocument:
        headers: dict[str, str] = {}
        body = self._container.read_item(
            item=document_id,
            partition_key=partition_key_value,
            response_hook=capture_headers(headers),
        )
        document = CustomerDocument.model_validate(body)

        diag = ResponseDiagnostics.from_headers(HTTPStatus.OK, headers)
        logger.info(
            "Status %d. Item %s read. ActivityId %s. Consuming %s Request Units.",
            diag.status_code, partition_key_value, diag.activity_id, diag.request_charge,
        )
        return document

    def delete_document(self, partition_key_value: str, document_id: str) -> ResponseDiagnostics:
        headers: dict[str, str] = {}
        self._container.delete_item(
            item=document_id,
            partition_key=partition_key_value,
            response_hook=capture_headers(headers),
        )

        diag = ResponseDiagnostics.from_headers(HTTPStatus.NO_CONTENT, headers)
        logger.info(
            "Status %d. Item %s deleted. ActivityId %s. Consuming %s Request Units.",
            diag.status_code, partition_key_value, diag.activity_id, diag.request_charge,
        )
        return diag


# ---------------------------------------------------------------------------
# Function-style entry points (database/container named per call)
# ---------------------------------------------------------------------------


def _store(client: CosmosClient, database_name: str, container_name: str) -> CosmosDocumentStore:
    return CosmosDocumentStore(database_name, container_name, "", client=client)


def create_document(
    client: CosmosClient,
    database_name: str,
    container_name: str,
    partition_key_value: str,
    document: CustomerDocument,
) -> ResponseDiagnostics | None:
    """Insert *document*. A 409 is logged and returns None."""
    return _store(client, database_name, container_name).create_document(partition_key_value, document)


def read_document(
    client: CosmosClient,
    database_name: str,
    container_name: str,
    partition_key_value: str,
    document_id: str,
) -> CustomerDocument:
    """Read the document at (partition_key_value, document_id)."""
    return _store(client, database_name, container_name).read_document(partition_key_value, document_id)


def delete_document(
    client: CosmosClient,
    database_name: str,
    container_name: str,
    partition_key_value: str,
    document_id: str,
) -> ResponseDiagnostics:
    """Delete the document at (partition_key_value, document_id)."""
    return _store(client, database_name, container_name).delete_document(partition_key_value, document_id)
