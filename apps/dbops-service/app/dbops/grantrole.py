from typing import Optional

from ..clickhouse.client import ClickHouseClient
from ..clickhouse.row import Row
from ..querybuilder import Field, GrantRole as GrantRoleQuery, RevokeRole, Select, WhereEquals
from .base import execute, grantee_name, select_one
from .models import GrantRole

TABLE = "system.role_grants"


def _grantee(user_name: Optional[str], role_name: Optional[str]) -> WhereEquals:
    name = grantee_name(user_name, role_name)
    return WhereEquals("user_name" if user_name is not None else "role_name", name)


def _scan(row: Row) -> GrantRole:
    return GrantRole(
        role_name=row.get_string("granted_role_name"),
        grantee_user_name=row.get_nullable_string("user_name"),
        grantee_role_name=row.get_nullable_string("role_name"),
        admin_option=row.get_bool("with_admin_option"),
    )


async def grant_role(client: ClickHouseClient, grant: GrantRole,
                     cluster_name: Optional[str] = None) -> Optional[GrantRole]:
    query = GrantRoleQuery(grant.role_name, grant.grantee).with_admin_option(grant.admin_option)
    await execute(client, query.with_cluster(cluster_name))
    return await get_grant_role(
        client, grant.role_name, grant.grantee_user_name, grant.grantee_role_name,
        cluster_name=cluster_name,
    )


async def get_grant_role(client: ClickHouseClient, role_name: str,
                         grantee_user_name: Optional[str], grantee_role_name: Optional[str],
                         cluster_name: Optional[str] = None) -> Optional[GrantRole]:
    query = (
        Select(
            [Field("granted_role_name"), Field("user_name"), Field("role_name"), Field("with_admin_option")],
            TABLE,
        )
        .with_cluster(cluster_name)
        .where(WhereEquals("granted_role_name", role_name), _grantee(grantee_user_name, grantee_role_name))
    )
    return await select_one(client, query, _scan)


async def revoke_grant_role(client: ClickHouseClient, role_name: str,
                            grantee_user_name: Optional[str], grantee_role_name: Optional[str],
                            cluster_name: Optional[str] = None) -> None:
    grantee = grantee_name(grantee_user_name, grantee_role_name)
    await execute(client, RevokeRole(role_name, grantee).with_cluster(cluster_name))
