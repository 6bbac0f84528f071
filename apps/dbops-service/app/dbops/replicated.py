import logging
from typing import Optional

from ..clickhouse.client import ClickHouseClient
from ..querybuilder import Field, Select, WhereDiffers
from .base import select
from .errors import DBOpsError
from .models import UserDirectory

logger = logging.getLogger(__name__)

TABLE = "system.user_directories"
USERS_XML = "users_xml"
REPLICATED = "replicated"


async def list_user_directories(client: ClickHouseClient) -> list[UserDirectory]:
    query = Select([Field("type"), Field("precedence")], TABLE).where(WhereDiffers("type", USERS_XML))
    directories = await select(
        client,
        query,
        lambda row: UserDirectory(type=row.get_string("type"), precedence=row.get_uint64("precedence")),
    )
    return [d for d in directories if d.type != USERS_XML]


async def is_replicated_storage(client: ClickHouseClient) -> bool:
    """True when the highest-priority (lowest precedence) user directory is replicated."""
    directories = await list_user_directories(client)
    if not directories:
        return False
    active = min(directories, key=lambda d: d.precedence)
    return active.type == REPLICATED


async def warn_if_cluster_on_replicated(client: ClickHouseClient, cluster_name: Optional[str], what: str) -> bool:
    """Log a warning when ON CLUSTER is used against replicated access storage.

    Never blocks the operation; returns whether the warning was emitted.
    """
    if cluster_name is None:
        return False
    try:
        replicated = await is_replicated_storage(client)
    except DBOpsError as e:
        logger.warning("Could not check user directory storage for %s: %s", what, e)
        return False
    if not replicated:
        return False
    logger.warning(
        "cluster_name %r is set for %s but access entities use replicated storage; "
        "ON CLUSTER is not needed and may be rejected by the server",
        cluster_name, what,
    )
    return True
