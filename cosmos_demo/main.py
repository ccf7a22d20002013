"""
Cosmos DB demo driver — provision, then create / read / delete one document.

Steps, in order:
  1. ensure database   (409 = already exists, fine)
  2. ensure container  (409 = already exists, fine)
  3. create item       (409 = already exists, fine)
  4. read item         (printed as indented JSON)
  5. delete item

A failed step is logged and the run moves on to the next one. Only an
unknown store backend or a failure to build the client stops the process.

Usage:
    source azure_config.env
    python -m cosmos_demo

    # No Cosmos account needed
    python -m cosmos_demo --backend mock

    # Leave the document in place
    python -m cosmos_demo --keep
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Callable

from azure.cosmos import CosmosClient

from cosmos_demo.config import CosmosSettings, load_settings
from cosmos_demo.cosmos_helpers import build_cosmos_client, ensure_container, ensure_database
from cosmos_demo.errors import ClientSetupError, is_not_found
from cosmos_demo.models import CustomerDocument
from cosmos_demo.stores import DocumentStore, available_backends, get_document_store

logger = logging.getLogger("cosmos-demo.main")


def sample_document(document_id: str = "1", customer_id: str = "1") -> CustomerDocument:
    return CustomerDocument(
        id=document_id,
        customer_id=customer_id,
        title="Mr",
        first_name="Test",
        last_name="User",
        email_address="test@example.com",
        phone_number="123-456-7890",
    )


def _run_step(name: str, fn: Callable[[], object]) -> bool:
    """Run one step; log and swallow its error so later steps still run."""
    try:
        fn()
    except Exception as e:
        if is_not_found(e):
            logger.error("%s failed: document not found: %s", name, e)
        else:
            logger.error("%s failed: %s", name, e)
        return False
    return True


def run(
    settings: CosmosSettings,
    document: CustomerDocument,
    *,
    client: CosmosClient | None = None,
    store: DocumentStore | None = None,
    keep: bool = False,
) -> dict[str, bool]:
    """Run every step against *settings* and report which ones succeeded.

    For the Cosmos backend *client* is required. *store* may be passed to
    reuse an existing store (tests, mock runs).
    """
    results: dict[str, bool] = {}
    pk = document.customer_id

    if settings.backend == "cosmosdb-nosql":
        if client is None:
            raise ValueError("cosmosdb-nosql backend requires a CosmosClient")
        results["createDatabase"] = _run_step(
            "createDatabase", lambda: ensure_database(client, settings.database_name),
        )
        results["createContainer"] = _run_step(
            "createContainer",
            lambda: ensure_container(
                client,
                settings.database_name,
                settings.container_name,
                settings.partition_key_path,
                settings.throughput,
            ),
        )
    else:
        logger.info("Backend %s: skipping database/container provisioning", settings.backend)

    if store is None:
        store = get_document_store(
            settings.database_name,
            settings.container_name,
            settings.partition_key_path,
            backend_type=settings.backend,
            client=client,
        )

    def _read() -> None:
        item = store.read_document(pk, document.id)
        print(f"Read item with customerId {item.customer_id}")
        print(item.to_json(indent=4))

    results["createItem"] = _run_step("createItem", lambda: store.create_document(pk, document))
    results["readItem"] = _run_step("readItem", _read)
    if not keep:
        results["deleteItem"] = _run_step("deleteItem", lambda: store.delete_document(pk, document.id))
    return results


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create, read and delete one document in Azure Cosmos DB NoSQL",
    )
    parser.add_argument("--env-file", help="dotenv file to load (default: azure_config.env)")
    parser.add_argument(
        "--backend", choices=["cosmosdb-nosql", "mock"],
        help="Document store backend (default: DOCUMENT_STORE_BACKEND or cosmosdb-nosql)",
    )
    parser.add_argument("--document-id", default="1", help="Document id (default: 1)")
    parser.add_argument("--customer-id", default="1", help="Partition key value (default: 1)")
    parser.add_argument("--keep", action="store_true", help="Don't delete the document afterwards")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = _parse_args(argv)
    if args.verbose:
        logging.getLogger("cosmos-demo").setLevel(logging.DEBUG)

    settings = load_settings(args.env_file)
    if args.backend:
        settings = replace(settings, backend=args.backend)
    if settings.backend not in available_backends():
        logger.critical(
            "Unknown document store backend %r. Available: %s",
            settings.backend, ", ".join(available_backends()),
        )
        sys.exit(1)

    logger.info(
        "Backend %s, database %s, container %s (pk: %s)",
        settings.backend, settings.database_name, settings.container_name, settings.partition_key_path,
    )

    client: CosmosClient | None = None
    if settings.backend == "cosmosdb-nosql":
        try:
            client = build_cosmos_client(settings)
        except ClientSetupError as e:
            logger.critical("%s", e)
            sys.exit(1)

    document = sample_document(args.document_id, args.customer_id)
    if client is None:
        run(settings, document, keep=args.keep)
    else:
        with client:
            run(settings, document, client=client, keep=args.keep)
    return 0


if __name__ == "__main__":
    sys.exit(main())
