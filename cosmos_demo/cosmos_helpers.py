"""
Cosmos helpers — client construction and idempotent provisioning.

Builds the data-plane CosmosClient from CosmosSettings and provides the
two "ensure" operations used before any document work:

  ensure_database   : create the database, 409 means it already exists
  ensure_container  : create the container with a single-path partition
                      key and manual throughput, 409 means it already exists

Used by: stores.cosmos_nosql, main
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from azure.core.exceptions import AzureError
from azure.cosmos import ContainerProxy, CosmosClient, DatabaseProxy, PartitionKey
from azure.cosmos.exceptions import CosmosHttpResponseError
from azure.identity import DefaultAzureCredential

from cosmos_demo.config import DEFAULT_THROUGHPUT, CosmosSettings
from cosmos_demo.errors import ClientSetupError, is_conflict

logger = logging.getLogger("cosmos-demo.cosmos")

# ---------------------------------------------------------------------------
# Client construction
# ---------------------------------------------------------------------------


def build_cosmos_client(settings: CosmosSettings) -> CosmosClient:
    """Create a CosmosClient from settings.

    Credential precedence: connection string, then account key, then
    DefaultAzureCredential (managed identity in Azure, az login locally).
    Session consistency is requested at the client level so every write
    and read in this process shares one session.

    Raises:
        ClientSetupError: If the endpoint is missing or the SDK rejects the
            credential / endpoint. Callers treat this as fatal.
    """
    consistency = settings.consistency_level or None
    try:
        if settings.connection_string:
            logger.debug("Building CosmosClient from connection string")
            return CosmosClient.from_connection_string(
                settings.connection_string, consistency_level=consistency,
            )

        if not settings.endpoint:
            raise ClientSetupError(
                "COSMOS_NOSQL_ENDPOINT is not set. Set it in azure_config.env "
                "or export it before running."
            )

        if settings.key:
            logger.debug("Building CosmosClient for %s with account key", settings.account_name)
            credential: Any = settings.key
        else:
            logger.debug("Building CosmosClient for %s with DefaultAzureCredential", settings.account_name)
            credential = DefaultAzureCredential()

        return CosmosClient(
            url=settings.endpoint, credential=credential, consistency_level=consistency,
        )
    except (AzureError, ValueError, TypeError) as e:
        raise ClientSetupError(f"Failed to create Cosmos DB client: {e}") from e


def capture_headers(sink: dict[str, str]):
    """Return a response_hook that copies response headers into *sink*.

    Older SDK releases call the hook with the headers only; newer ones also
    pass the result.
    """

    def _hook(headers: Mapping[str, str], _result: Any = None) -> None:
        sink.update(headers or {})

    return _hook


# ---------------------------------------------------------------------------
# Idempotent provisioning
# ---------------------------------------------------------------------------


def ensure_database(client: CosmosClient, database_name: str) -> DatabaseProxy:
    """Create *database_name* unless it already exists.

    A 409 from the service counts as success. Any other error propagates.

    Returns:
        DatabaseProxy for the database.
    """
    headers: dict[str, str] = {}
    try:
        database = client.create_database(
            id=database_name, response_hook=capture_headers(headers),
        )
    except CosmosHttpResponseError as e:
        if not is_conflict(e):
            raise
        logger.info("Database [%s] already exists", database_name)
        return client.get_database_client(database_name)

    logger.info(
        "Database [%s] created. ActivityId %s",
        database_name, headers.get("x-ms-activity-id", ""),
    )
    return database


def ensure_container(
    client: CosmosClient,
    database_name: str,
    container_name: str,
    partition_key_path: str,
    throughput: int | None = None,
) -> ContainerProxy:
    """Create *container_name* in *database_name* unless it already exists.

    Args:
        client: Data-plane CosmosClient
        database_name: Database that owns the container
        container_name: Container id
        partition_key_path: Single partition key path (e.g. "/customerId")
        throughput: Manual throughput in RU/s. Defaults to 400.

    Returns:
        ContainerProxy for the container.
    """
    database = client.get_database_client(database_name)
    headers: dict[str, str] = {}
    try:
        container = database.create_container(
            id=container_name,
            partition_key=PartitionKey(path=partition_key_path),
            offer_throughput=throughput or DEFAULT_THROUGHPUT,
            response_hook=capture_headers(headers),
        )
    except CosmosHttpResponseError as e:
        if not is_conflict(e):
            raise
        logger.info("Container [%s] already exists", container_name)
        return database.get_container_client(container_name)

    logger.info(
        "Container [%s] created (pk=%s). ActivityId %s",
        container_name, partition_key_path, headers.get("x-ms-activity-id", ""),
    )
    return container


def get_container(client: CosmosClient, database_name: str, container_name: str) -> ContainerProxy:
    """ContainerProxy for an existing container. Makes no remote call."""
    return client.get_database_client(database_name).get_container_client(container_name)
