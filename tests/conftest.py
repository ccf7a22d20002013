"""Stand-ins for the azure-cosmos proxies, backed by plain dicts."""

from __future__ import annotations

import os
from typing import Any
from unittest import mock

import pytest
from azure.cosmos.exceptions import CosmosResourceExistsError, CosmosResourceNotFoundError

HEADERS = {"x-ms-activity-id": "00000000-0000-0000-0000-000000000001", "x-ms-request-charge": "6.29"}


def _not_found(item_id: str) -> CosmosResourceNotFoundError:
    return CosmosResourceNotFoundError(status_code=404, message=f"Entity {item_id} does not exist")


class DummyContainer:
    def __init__(self, pk_field: str = "customerId"):
        self.items: dict[tuple[str, str], dict[str, Any]] = {}
        self.pk_field = pk_field

    def create_item(self, body, response_hook=None, **kwargs):
        key = (body[self.pk_field], body["id"])
        if key in self.items:
            raise CosmosResourceExistsError(status_code=409, message="Entity already exists")
        self.items[key] = dict(body, _rid="abc==", _etag='"0000"', _ts=1700000000)
        if response_hook:
            response_hook(HEADERS, self.items[key])
        return self.items[key]

    def read_item(self, item, partition_key, response_hook=None, **kwargs):
        try:
            body = self.items[(partition_key, item)]
        except KeyError:
            raise _not_found(item) from None
        if response_hook:
            response_hook(HEADERS, body)
        return body

    def delete_item(self, item, partition_key, response_hook=None, **kwargs):
        if self.items.pop((partition_key, item), None) is None:
            raise _not_found(item)
        if response_hook:
            response_hook(HEADERS, None)


class DummyDatabase:
    def __init__(self, name: str):
        self.id = name
        self.containers: dict[str, DummyContainer] = {}
        self.create_calls: list[dict[str, Any]] = []

    def create_container(self, id, partition_key, offer_throughput=None, response_hook=None, **kwargs):
        self.create_calls.append(
            {"id": id, "partition_key": partition_key, "offer_throughput": offer_throughput}
        )
        if id in self.containers:
            raise CosmosResourceExistsError(status_code=409, message="Resource with specified id already exists")
        self.containers[id] = DummyContainer(partition_key["paths"][0].lstrip("/"))
        if response_hook:
            response_hook(HEADERS, {"id": id})
        return self.containers[id]

    def get_container_client(self, container):
        return self.containers.setdefault(container, DummyContainer())


class DummyClient:
    def __init__(self):
        self.databases: dict[str, DummyDatabase] = {}
        self.create_calls: list[str] = []

    def create_database(self, id, response_hook=None, **kwargs):
        self.create_calls.append(id)
        if id in self.databases:
            raise CosmosResourceExistsError(status_code=409, message="Resource with specified id already exists")
        self.databases[id] = DummyDatabase(id)
        if response_hook:
            response_hook(HEADERS, {"id": id})
        return self.databases[id]

    def get_database_client(self, database):
        return self.databases.setdefault(database, DummyDatabase(database))

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return None


@pytest.fixture
def client() -> DummyClient:
    return DummyClient()


ENV_VARS = (
    "COSMOS_NOSQL_ENDPOINT",
    "COSMOS_NOSQL_KEY",
    "COSMOS_CONNECTION_STRING",
    "COSMOS_NOSQL_DATABASE",
    "COSMOS_NOSQL_CONTAINER",
    "COSMOS_PARTITION_KEY_PATH",
    "COSMOS_CONTAINER_THROUGHPUT",
    "COSMOS_CONSISTENCY_LEVEL",
    "DOCUMENT_STORE_BACKEND",
)


@pytest.fixture
def clean_env():
    """Strip config vars; anything load_dotenv adds is undone afterwards."""
    with mock.patch.dict(os.environ):
        for name in ENV_VARS:
            os.environ.pop(name, None)
        yield
