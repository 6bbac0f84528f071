"""Glue between statement builders and the query-execution port.

Each helper adds one layer of context to failures and chains the cause.
"""

from typing import Callable, TypeVar

from ..clickhouse.client import ClickHouseClient, ClickHouseError
from ..clickhouse.row import Row, RowError
from ..querybuilder.base import QueryBuilder, QueryBuilderError
from .errors import DBOpsError, InvalidRequestError

T = TypeVar("T")


def build(builder: QueryBuilder) -> str:
    try:
        return builder.build()
    except QueryBuilderError as e:
        raise InvalidRequestError(f"error building query: {e}") from e


async def execute(client: ClickHouseClient, builder: QueryBuilder) -> None:
    sql = build(builder)
    try:
        await client.exec(sql)
    except ClickHouseError as e:
        raise DBOpsError(f"error running query: {e}") from e


async def select(client: ClickHouseClient, builder: QueryBuilder, scan: Callable[[Row], T]) -> list[T]:
    """Run a SELECT and map every row through ``scan``."""
    sql = build(builder)
    results: list[T] = []

    def callback(row: Row) -> None:
        try:
            results.append(scan(row))
        except RowError as e:
            raise DBOpsError(f"error scanning query result: {e}") from e

    try:
        await client.select(sql, callback)
    except ClickHouseError as e:
        raise DBOpsError(f"error running query: {e}") from e
    return results


async def select_one(client: ClickHouseClient, builder: QueryBuilder, scan: Callable[[Row], T]) -> T | None:
    rows = await select(client, builder, scan)
    return rows[0] if rows else None


def grantee_name(user_name: str | None, role_name: str | None) -> str:
    """Return the single grantee; exactly one of user or role must be given."""
    if (user_name is None) == (role_name is None):
        raise InvalidRequestError("exactly one of grantee user name or grantee role name must be set")
    return user_name if user_name is not None else role_name
