import logging
from typing import Optional

from ..clickhouse.client import ClickHouseClient
from ..clickhouse.row import Row
from ..grants.overlaps import explain_overlap, find_overlaps
from ..querybuilder import Field, GrantPrivilege as GrantPrivilegeQuery, IsNull, RevokePrivilege, Select, Where, WhereEquals
from .base import execute, grantee_name, select, select_one
from .errors import GrantSubsumedError
from .models import GrantPrivilege

logger = logging.getLogger(__name__)

TABLE = "system.grants"

FIELDS = ("database", "table", "column", "user_name", "role_name", "grant_option")


def _fields() -> list[Field]:
    return [Field("access_type").to_string()] + [Field(name) for name in FIELDS]


def _scan(row: Row) -> GrantPrivilege:
    return GrantPrivilege(
        access_type=row.get_string("access_type"),
        database_name=row.get_nullable_string("database"),
        table_name=row.get_nullable_string("table"),
        column_name=row.get_nullable_string("column"),
        grantee_user_name=row.get_nullable_string("user_name"),
        grantee_role_name=row.get_nullable_string("role_name"),
        grant_option=row.get_bool("grant_option"),
    )


def _equals_or_null(field: str, value: Optional[str]) -> Where:
    if value is None:
        return IsNull(field)
    return WhereEquals(field, value)


def _grantee_where(user_name: Optional[str], role_name: Optional[str]) -> Where:
    name = grantee_name(user_name, role_name)
    return WhereEquals("user_name" if user_name is not None else "role_name", name)


async def grant_privilege(client: ClickHouseClient, grant: GrantPrivilege,
                          cluster_name: Optional[str] = None) -> GrantPrivilege:
    """Run the GRANT and read it back.

    Raises GrantSubsumedError when ClickHouse recorded nothing because a
    broader grant already covers the request.
    """
    query = (
        GrantPrivilegeQuery(grant.access_type, grant.grantee)
        .with_database(grant.database_name)
        .with_table(grant.table_name)
        .with_column(grant.column_name)
        .with_grant_option(grant.grant_option)
        .with_cluster(cluster_name)
    )
    await execute(client, query)

    created = await get_grant_privilege(
        client, grant.access_type, grant.database_name, grant.table_name, grant.column_name,
        grant.grantee_user_name, grant.grantee_role_name, cluster_name=cluster_name,
    )
    if created is not None:
        return created

    existing = await get_all_grants_for_grantee(
        client, grant.grantee_user_name, grant.grantee_role_name, cluster_name=cluster_name,
    )
    matches = find_overlaps(grant, existing)
    logger.warning(
        "GRANT %s to %s produced no row, %d overlapping grant(s) found",
        grant.access_type, grant.grantee, len(matches),
    )
    raise GrantSubsumedError(grant, matches, [explain_overlap(grant, m) for m in matches])


async def get_grant_privilege(client: ClickHouseClient, access_type: str,
                              database: Optional[str], table: Optional[str], column: Optional[str],
                              grantee_user_name: Optional[str], grantee_role_name: Optional[str],
                              cluster_name: Optional[str] = None) -> Optional[GrantPrivilege]:
    query = (
        Select(_fields(), TABLE)
        .with_cluster(cluster_name)
        .where(
            WhereEquals("access_type", access_type),
            _equals_or_null("database", database),
            _equals_or_null("table", table),
            _equals_or_null("column", column),
            _grantee_where(grantee_user_name, grantee_role_name),
        )
    )
    return await select_one(client, query, _scan)


async def get_all_grants_for_grantee(client: ClickHouseClient,
                                     grantee_user_name: Optional[str], grantee_role_name: Optional[str],
                                     cluster_name: Optional[str] = None) -> list[GrantPrivilege]:
    query = (
        Select(_fields(), TABLE)
        .with_cluster(cluster_name)
        .where(_grantee_where(grantee_user_name, grantee_role_name))
    )
    return await select(client, query, _scan)


async def revoke_grant_privilege(client: ClickHouseClient, access_type: str,
                                 database: Optional[str], table: Optional[str], column: Optional[str],
                                 grantee_user_name: Optional[str], grantee_role_name: Optional[str],
                                 cluster_name: Optional[str] = None) -> None:
    grantee = grantee_name(grantee_user_name, grantee_role_name)
    query = (
        RevokePrivilege(access_type, grantee)
        .with_database(database)
        .with_table(table)
        .with_column(column)
        .with_cluster(cluster_name)
    )
    await execute(client, query)
