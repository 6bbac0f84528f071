from typing import Optional

from ..clickhouse.client import ClickHouseClient
from ..querybuilder import AlterUser, CreateUser, Field, Identification, OrderDirection, Select, WhereEquals, drop_user
from .base import execute, select, select_one
from .models import User

TABLE = "system.users"
PROFILE_ELEMENTS = "system.settings_profile_elements"


async def create_user(client: ClickHouseClient, user: User,
                      cluster_name: Optional[str] = None) -> Optional[User]:
    builder = CreateUser(user.name).with_cluster(cluster_name).with_settings_profile(user.settings_profile)
    if user.password_sha256_hash:
        builder.identified(Identification.SHA256_HASH, user.password_sha256_hash)
    await execute(client, builder)
    return await find_user_by_name(client, user.name, cluster_name=cluster_name)


async def get_user(client: ClickHouseClient, id: str,
                   cluster_name: Optional[str] = None) -> Optional[User]:
    query = Select([Field("name")], TABLE).with_cluster(cluster_name).where(WhereEquals("id", id))
    name = await select_one(client, query, lambda row: row.get_string("name"))
    if name is None:
        return None

    query = (
        Select([Field("inherit_profile")], PROFILE_ELEMENTS)
        .with_cluster(cluster_name)
        .where(WhereEquals("user_name", name))
        .order_by(Field("index"), OrderDirection.ASC)
    )
    profiles = await select(client, query, lambda row: row.get_nullable_string("inherit_profile"))
    # a user carries at most one profile; the last row wins
    profile = next((p for p in reversed(profiles) if p is not None), None)
    return User(id=id, name=name, settings_profile=profile)


async def update_user(client: ClickHouseClient, user: User,
                      cluster_name: Optional[str] = None) -> Optional[User]:
    """Apply a rename and/or settings profile change to the user ``user.id``."""
    existing = await get_user(client, user.id, cluster_name=cluster_name)
    if existing is None:
        return None
    if existing.name == user.name and existing.settings_profile == user.settings_profile:
        return existing

    builder = (
        AlterUser(existing.name)
        .rename_to(user.name)
        .drop_settings_profile(existing.settings_profile)
        .add_settings_profile(user.settings_profile)
        .with_cluster(cluster_name)
    )
    await execute(client, builder)
    return await get_user(client, user.id, cluster_name=cluster_name)


async def delete_user(client: ClickHouseClient, id: str,
                      cluster_name: Optional[str] = None) -> None:
    user = await get_user(client, id, cluster_name=cluster_name)
    if user is None:
        return
    await execute(client, drop_user(user.name).with_cluster(cluster_name))


async def find_user_by_name(client: ClickHouseClient, name: str,
                            cluster_name: Optional[str] = None) -> Optional[User]:
    query = (
        Select([Field("id").to_string()], TABLE)
        .with_cluster(cluster_name)
        .where(WhereEquals("name", name))
    )
    id = await select_one(client, query, lambda row: row.get_string("id"))
    if id is None:
        return None
    return await get_user(client, id, cluster_name=cluster_name)
