"""ClickHouse HTTP interface transport (JSONCompactStrings)."""

import json
import logging

import httpx

from .client import ClickHouseClient, ClickHouseError, RowCallback, mask_sql
from .row import Row

logger = logging.getLogger(__name__)

RESPONSE_FORMAT = "JSONCompactStrings"


def parse_compact_strings(body: str) -> list[Row]:
    """Turn a ``{"meta": [...], "data": [[...]]}`` document into rows keyed by column."""
    if not body.strip():
        return []
    try:
        doc = json.loads(body)
    except ValueError as e:
        raise ClickHouseError(f"error parsing response: {e}") from e

    names = [m["name"] for m in doc.get("meta", [])]
    rows = []
    for values in doc.get("data", []):
        if len(values) != len(names):
            raise ClickHouseError(
                f"error parsing response: row has {len(values)} values for {len(names)} columns"
            )
        rows.append(Row(dict(zip(names, values))))
    return rows


class HTTPClient(ClickHouseClient):
    def __init__(
        self,
        host: str,
        port: int,
        protocol: str = "http",
        username: str = "default",
        password: str = "",
        timeout: float = 30.0,
        verify: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not host:
            raise ValueError("host is required")
        if not port:
            raise ValueError("port is required")
        if not username:
            raise ValueError("exactly one authentication method is required")
        if protocol not in ("http", "https"):
            raise ValueError(f"unsupported protocol for HTTP client: {protocol!r}")

        self.host = host
        self.port = port
        self.protocol = protocol
        self.username = username
        self.password = password
        self.timeout = timeout
        self.verify = verify
        self.base_url = f"{protocol}://{host}:{port}/"
        self._transport = transport

    def _params(self) -> dict[str, str]:
        params = {"user": self.username}
        if self.password:
            params["password"] = self.password
        return params

    async def _run(self, sql: str) -> str:
        logger.debug("Running query: %s", mask_sql(sql))
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, verify=self.verify, transport=self._transport
            ) as client:
                resp = await client.post(
                    self.base_url,
                    params=self._params(),
                    headers={"X-ClickHouse-Format": RESPONSE_FORMAT},
                    content=sql,
                )
                resp.raise_for_status()
                return resp.text
        except httpx.HTTPStatusError as e:
            err = ClickHouseError.from_exception(e, e.response.text.strip()[:2000])
            logger.error("Query failed [%s]: %s", err.error_code, mask_sql(sql))
            raise err from e
        except httpx.HTTPError as e:
            err = ClickHouseError.from_exception(e, f"error executing query: {e}")
            logger.error("Query failed [%s]: %s", err.error_code, mask_sql(sql))
            raise err from e

    async def select(self, sql: str, callback: RowCallback) -> None:
        body = await self._run(sql)
        for row in parse_compact_strings(body):
            callback(row)

    async def exec(self, sql: str) -> None:
        await self._run(sql)
