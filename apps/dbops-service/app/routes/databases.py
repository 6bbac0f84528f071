import logging
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth import verify_internal_key
from ..clickhouse.client import ClickHouseClient
from ..connection import get_client
from ..dbops import database as ops
from ..dbops.models import Database
from ..schemas import DatabaseCreate
from .common import http_error, not_found

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/databases", tags=["databases"], dependencies=[Depends(verify_internal_key)])


@router.post("", response_model=Database, status_code=201)
async def create_database(body: DatabaseCreate, client: ClickHouseClient = Depends(get_client)):
    try:
        created = await ops.create_database(
            client, Database(name=body.name, comment=body.comment), cluster_name=body.cluster_name,
        )
    except Exception as e:
        raise http_error(e, "creating database")
    if created is None:
        raise not_found("Database")
    return created


@router.get("", response_model=Database)
async def find_database(name: str, cluster_name: Optional[str] = None,
                        client: ClickHouseClient = Depends(get_client)):
    try:
        database = await ops.find_database_by_name(client, name, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "looking up database")
    if database is None:
        raise not_found("Database")
    return database


@router.get("/{uuid}", response_model=Database)
async def get_database(uuid: str, cluster_name: Optional[str] = None,
                       client: ClickHouseClient = Depends(get_client)):
    try:
        database = await ops.get_database(client, uuid, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "reading database")
    if database is None:
        raise not_found("Database")
    return database


@router.delete("/{uuid}", status_code=204)
async def delete_database(uuid: str, cluster_name: Optional[str] = None,
                          client: ClickHouseClient = Depends(get_client)):
    try:
        await ops.delete_database(client, uuid, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "deleting database")
