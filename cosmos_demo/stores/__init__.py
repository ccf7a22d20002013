"""
DocumentStore — backend-agnostic customer document CRUD protocol.

Provides:
  - DocumentStore Protocol (abstract interface)
  - Registry + factory function (get_document_store)
  - Auto-registers CosmosDocumentStore and MockDocumentStore on import

Usage:
    from cosmos_demo.stores import get_document_store

    store = get_document_store("customers", "customers", "/customerId", client=client)
    store.create_document("1", doc)
    doc = store.read_document("1", "1")
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from cosmos_demo.errors import UnknownDocumentStoreError
from cosmos_demo.models import CustomerDocument, ResponseDiagnostics


@runtime_checkable
class DocumentStore(Protocol):
    """Single-container document CRUD, addressed by (partition key, id)."""

    def create_document(
        self,
        partition_key_value: str,
        document: CustomerDocument,
    ) -> ResponseDiagnostics | None:
        """Insert a document. Returns None if it already existed (409)."""
        ...

    def read_document(
        self,
        partition_key_value: str,
        document_id: str,
    ) -> CustomerDocument:
        """Read a document. Not found propagates."""
        ...

    def delete_document(
        self,
        partition_key_value: str,
        document_id: str,
    ) -> ResponseDiagnostics:
        """Delete a document. Not found propagates."""
        ...


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_stores: dict[str, type] = {}


def register_document_store(name: str, cls: type) -> None:
    _stores[name] = cls


def available_backends() -> list[str]:
    """Registered backend names, sorted."""
    return sorted(_stores)


def store_class(backend: str) -> type:
    """Look up the store class for *backend*.

    Raises:
        UnknownDocumentStoreError: If nothing is registered under that name.
    """
    try:
        return _stores[backend]
    except KeyError:
        raise UnknownDocumentStoreError(
            f"Unknown document store backend {backend!r}. "
            f"Available: {', '.join(available_backends())}"
        ) from None


def get_document_store(
    db_name: str,
    container_name: str,
    partition_key_path: str,
    *,
    backend_type: str | None = None,
    client: Any = None,
    ensure_created: bool = False,
) -> DocumentStore:
    """Build the store registered under *backend_type* for one container.

    *backend_type* defaults to "cosmosdb-nosql". *client* is the
    CosmosClient the Cosmos store talks through; the mock ignores it. With
    *ensure_created* the database and container are provisioned first.
    """
    cls = store_class(backend_type or "cosmosdb-nosql")
    return cls(
        db_name, container_name, partition_key_path,
        client=client, ensure_created=ensure_created,
    )


# ---------------------------------------------------------------------------
# Auto-register at module load
# ---------------------------------------------------------------------------

from .cosmos_nosql import CosmosDocumentStore  # noqa: E402
from .mock_store import MockDocumentStore  # noqa: E402

register_document_store("cosmosdb-nosql", CosmosDocumentStore)
register_document_store("mock", MockDocumentStore)
