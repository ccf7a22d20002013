"""Azure Cosmos DB NoSQL demo: idempotent provisioning and single-document CRUD."""

__version__ = "0.1.0"
