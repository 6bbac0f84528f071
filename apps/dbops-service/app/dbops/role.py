from typing import Optional

from ..clickhouse.client import ClickHouseClient
from ..querybuilder import AlterRole, CreateRole, Field, OrderDirection, Select, WhereEquals, drop_role
from .base import execute, select, select_one
from .models import Role

TABLE = "system.roles"
PROFILE_ELEMENTS = "system.settings_profile_elements"


async def create_role(client: ClickHouseClient, role: Role,
                      cluster_name: Optional[str] = None) -> Optional[Role]:
    await execute(client, CreateRole(role.name).with_cluster(cluster_name))
    return await find_role_by_name(client, role.name, cluster_name=cluster_name)


async def _role_profiles(client: ClickHouseClient, name: str, cluster_name: Optional[str]) -> list[str]:
    query = (
        Select([Field("inherit_profile")], PROFILE_ELEMENTS)
        .with_cluster(cluster_name)
        .where(WhereEquals("role_name", name))
        .order_by(Field("index"), OrderDirection.ASC)
    )
    profiles = await select(client, query, lambda row: row.get_nullable_string("inherit_profile"))
    return [p for p in profiles if p is not None]


async def get_role(client: ClickHouseClient, id: str,
                   cluster_name: Optional[str] = None) -> Optional[Role]:
    query = Select([Field("name")], TABLE).with_cluster(cluster_name).where(WhereEquals("id", id))
    name = await select_one(client, query, lambda row: row.get_string("name"))
    if name is None:
        return None
    return Role(id=id, name=name, settings_profiles=await _role_profiles(client, name, cluster_name))


async def update_role(client: ClickHouseClient, role: Role,
                      cluster_name: Optional[str] = None) -> Optional[Role]:
    """Rename the role identified by ``role.id``; returns None if it is gone."""
    existing = await get_role(client, role.id, cluster_name=cluster_name)
    if existing is None:
        return None
    if existing.name == role.name:
        return existing

    await execute(client, AlterRole(existing.name).rename_to(role.name).with_cluster(cluster_name))
    return await get_role(client, role.id, cluster_name=cluster_name)


async def delete_role(client: ClickHouseClient, id: str,
                      cluster_name: Optional[str] = None) -> None:
    role = await get_role(client, id, cluster_name=cluster_name)
    if role is None:
        return
    await execute(client, drop_role(role.name).with_cluster(cluster_name))


async def find_role_by_name(client: ClickHouseClient, name: str,
                            cluster_name: Optional[str] = None) -> Optional[Role]:
    query = (
        Select([Field("id").to_string()], TABLE)
        .with_cluster(cluster_name)
        .where(WhereEquals("name", name))
    )
    id = await select_one(client, query, lambda row: row.get_string("id"))
    if id is None:
        return None
    return await get_role(client, id, cluster_name=cluster_name)
