"""
Configuration — environment variable loading for the Cosmos demo.

Centralises all env var reads so other modules receive a CosmosSettings
value instead of calling os.getenv() directly. Values may come from the
process environment or from azure_config.env at the project root.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Project structure
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[1]
CONFIG_FILE = PROJECT_ROOT / "azure_config.env"

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_DATABASE = "customers"
DEFAULT_CONTAINER = "customers"
DEFAULT_PARTITION_KEY_PATH = "/customerId"
DEFAULT_THROUGHPUT = 400  # RU/s; the service minimum for manual throughput
DEFAULT_CONSISTENCY_LEVEL = "Session"
DEFAULT_BACKEND = "cosmosdb-nosql"


@dataclass(frozen=True)
class CosmosSettings:
    """Connection settings, read once at startup and passed by parameter."""

    endpoint: str = ""
    key: str = ""
    connection_string: str = ""
    database_name: str = DEFAULT_DATABASE
    container_name: str = DEFAULT_CONTAINER
    partition_key_path: str = DEFAULT_PARTITION_KEY_PATH
    throughput: int = DEFAULT_THROUGHPUT
    consistency_level: str = DEFAULT_CONSISTENCY_LEVEL
    backend: str = DEFAULT_BACKEND

    @property
    def account_name(self) -> str:
        """Account name derived from the endpoint host (e.g. "myacct")."""
        return self.endpoint.replace("https://", "").split(".")[0]


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise EnvironmentError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(env_file: str | Path | None = None) -> CosmosSettings:
    """Load settings from the environment.

    Args:
        env_file: Optional dotenv file to load first. Defaults to
            azure_config.env at the project root. Variables already set in
            the process environment win over the file.

    Returns:
        An immutable CosmosSettings.
    """
    load_dotenv(env_file or CONFIG_FILE)

    return CosmosSettings(
        endpoint=os.getenv("COSMOS_NOSQL_ENDPOINT", ""),
        key=os.getenv("COSMOS_NOSQL_KEY", ""),
        connection_string=os.getenv("COSMOS_CONNECTION_STRING", ""),
        database_name=os.getenv("COSMOS_NOSQL_DATABASE", DEFAULT_DATABASE),
        container_name=os.getenv("COSMOS_NOSQL_CONTAINER", DEFAULT_CONTAINER),
        partition_key_path=os.getenv("COSMOS_PARTITION_KEY_PATH", DEFAULT_PARTITION_KEY_PATH),
        throughput=_int_env("COSMOS_CONTAINER_THROUGHPUT", DEFAULT_THROUGHPUT),
        consistency_level=os.getenv("COSMOS_CONSISTENCY_LEVEL", DEFAULT_CONSISTENCY_LEVEL),
        backend=os.getenv("DOCUMENT_STORE_BACKEND", DEFAULT_BACKEND).lower(),
    )
