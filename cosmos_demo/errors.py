"""
Error classification for Cosmos DB calls.

A single place decides whether a remote failure is a "conflict" (the
resource already exists, HTTP 409) so every idempotent create uses the
same rule.
"""

from __future__ import annotations

from http import HTTPStatus

from azure.cosmos.exceptions import CosmosHttpResponseError


class ClientSetupError(RuntimeError):
    """Credential or client construction failed. Fatal for the driver."""


class PartitionKeyMismatchError(ValueError):
    """Partition key value does not match the document being written."""


def is_conflict(error: BaseException | None) -> bool:
    """True if *error* is a Cosmos 409 (resource already exists)."""
    return (
        isinstance(error, CosmosHttpResponseError)
        and error.status_code == HTTPStatus.CONFLICT
    )


def is_not_found(error: BaseException | None) -> bool:
    return (
        isinstance(error, CosmosHttpResponseError)
        and error.status_code == HTTPStatus.NOT_FOUND
    )


def check_partition_key(partition_key_value: str, document_value: str) -> None:
    """Raise PartitionKeyMismatchError unless the two values agree."""
    if partition_key_value != document_value:
        raise PartitionKeyMismatchError(
            f"Partition key value {partition_key_value!r} does not match "
            f"document value {document_value!r}"
        )


class UnknownDocumentStoreError(ValueError):
    """No DocumentStore is registered under the requested backend name."""
