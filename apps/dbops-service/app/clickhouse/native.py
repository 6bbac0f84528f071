"""ClickHouse native protocol transport backed by clickhouse-driver.

clickhouse-driver is synchronous, so every statement runs in a worker thread.
"""

import asyncio
import logging
import uuid

from clickhouse_driver import Client
from clickhouse_driver import errors as ch_errors

from .client import ClickHouseClient, ClickHouseError, RowCallback, classify_error, mask_sql
from .row import Row

logger = logging.getLogger(__name__)

_SCALARS = (str, int, bool)


def _convert(column: str, value):
    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, uuid.UUID):
        return str(value)
    raise ClickHouseError(f"unsupported value type {type(value).__name__} in column {column}")


class NativeClient(ClickHouseClient):
    def __init__(
        self,
        host: str,
        port: int,
        username: str = "default",
        password: str = "",
        database: str = "default",
        secure: bool = False,
        verify: bool = True,
        timeout: float = 30.0,
        client_factory=Client,
    ):
        if not host:
            raise ValueError("host is required")
        if not port:
            raise ValueError("port is required")
        if not username:
            raise ValueError("exactly one authentication method is required")

        self.host = host
        self.port = port
        self._client_factory = client_factory
        self._kwargs = {
            "host": host,
            "port": port,
            "user": username,
            "password": password,
            "database": database,
            "secure": secure,
            "verify": verify,
            "connect_timeout": timeout,
            "send_receive_timeout": timeout,
        }

    def _execute(self, sql: str):
        client = self._client_factory(**self._kwargs)
        try:
            return client.execute(sql, with_column_types=True)
        finally:
            client.disconnect()

    async def _run(self, sql: str):
        logger.debug("Running query: %s", mask_sql(sql))
        try:
            return await asyncio.to_thread(self._execute, sql)
        except (ch_errors.Error, OSError, EOFError) as e:
            code = classify_error(e)
            logger.error("Query failed [%s]: %s", code, mask_sql(sql))
            raise ClickHouseError(f"error executing query: {e}", code) from e

    async def select(self, sql: str, callback: RowCallback) -> None:
        data, columns = await self._run(sql)
        names = [name for name, _type in columns]
        for values in data:
            callback(Row({n: _convert(n, v) for n, v in zip(names, values)}))

    async def exec(self, sql: str) -> None:
        await self._run(sql)
