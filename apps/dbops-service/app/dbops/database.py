from typing import Optional

from ..clickhouse.client import ClickHouseClient
from ..querybuilder import CreateDatabase, Field, Select, WhereEquals, drop_database
from .base import execute, select_one
from .models import Database

TABLE = "system.databases"


async def create_database(client: ClickHouseClient, database: Database,
                          cluster_name: Optional[str] = None) -> Optional[Database]:
    await execute(
        client,
        CreateDatabase(database.name).with_comment(database.comment or None).with_cluster(cluster_name),
    )
    return await find_database_by_name(client, database.name, cluster_name=cluster_name)


async def get_database(client: ClickHouseClient, uuid: str,
                       cluster_name: Optional[str] = None) -> Optional[Database]:
    query = (
        Select([Field("name"), Field("comment")], TABLE)
        .with_cluster(cluster_name)
        .where(WhereEquals("uuid", uuid))
    )
    return await select_one(
        client,
        query,
        lambda row: Database(uuid=uuid, name=row.get_string("name"), comment=row.get_string("comment")),
    )


async def delete_database(client: ClickHouseClient, uuid: str,
                          cluster_name: Optional[str] = None) -> None:
    database = await get_database(client, uuid, cluster_name=cluster_name)
    if database is None:
        return
    await execute(client, drop_database(database.name).with_cluster(cluster_name))


async def find_database_by_name(client: ClickHouseClient, name: str,
                                cluster_name: Optional[str] = None) -> Optional[Database]:
    query = (
        Select([Field("uuid").to_string()], TABLE)
        .with_cluster(cluster_name)
        .where(WhereEquals("name", name))
    )
    uuid = await select_one(client, query, lambda row: row.get_string("uuid"))
    if uuid is None:
        return None
    return await get_database(client, uuid, cluster_name=cluster_name)
