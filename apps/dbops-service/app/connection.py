"""Builds the ClickHouse transport from configuration."""

import logging

from cryptography.exceptions import InvalidTag

from . import config
from .clickhouse.client import ClickHouseClient
from .clickhouse.http import HTTPClient
from .clickhouse.native import NativeClient
from .encryption import decrypt

logger = logging.getLogger(__name__)

PROTOCOLS = ("http", "https", "native", "nativesecure")


class ConfigurationError(ValueError):
    pass


def _password(plaintext: str, encrypted: str | None) -> str:
    if not encrypted:
        return plaintext
    try:
        return decrypt(encrypted)
    except (InvalidTag, ValueError) as e:
        raise ConfigurationError(f"failed to decrypt ClickHouse password: {e}") from e


def build_client(
    protocol: str = config.CLICKHOUSE_PROTOCOL,
    host: str = config.CLICKHOUSE_HOST,
    port: int = config.CLICKHOUSE_PORT,
    username: str = config.CLICKHOUSE_USERNAME,
    password: str = config.CLICKHOUSE_PASSWORD,
    password_encrypted: str | None = config.CLICKHOUSE_PASSWORD_ENCRYPTED,
    database: str = config.CLICKHOUSE_DATABASE,
    timeout: float = config.CLICKHOUSE_TIMEOUT,
    verify: bool = config.CLICKHOUSE_TLS_VERIFY,
) -> ClickHouseClient:
    if protocol not in PROTOCOLS:
        raise ConfigurationError(
            f"invalid protocol {protocol!r}, must be one of {', '.join(PROTOCOLS)}"
        )
    if not host:
        raise ConfigurationError("host is required")
    if not 0 < port < 65536:
        raise ConfigurationError(f"invalid port {port}")
    if not username:
        raise ConfigurationError("username is required")

    secret = _password(password, password_encrypted)
    logger.info("Using %s ClickHouse transport at %s:%d", protocol, host, port)

    if protocol in ("native", "nativesecure"):
        return NativeClient(
            host=host,
            port=port,
            username=username,
            password=secret,
            database=database,
            secure=protocol == "nativesecure",
            verify=verify,
            timeout=timeout,
        )
    return HTTPClient(
        host=host,
        port=port,
        protocol=protocol,
        username=username,
        password=secret,
        timeout=timeout,
        verify=verify,
    )


_client: ClickHouseClient | None = None


def get_client() -> ClickHouseClient:
    """FastAPI dependency returning the process-wide transport."""
    global _client
    if _client is None:
        _client = build_client()
    return _client
