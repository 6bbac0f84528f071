from fastapi import APIRouter, Depends

from ..auth import verify_internal_key
from ..clickhouse.client import ClickHouseClient
from ..connection import get_client
from ..dbops.replicated import is_replicated_storage
from ..schemas import StorageOut
from .common import http_error

router = APIRouter(prefix="/storage", tags=["storage"], dependencies=[Depends(verify_internal_key)])


@router.get("", response_model=StorageOut)
async def get_storage(client: ClickHouseClient = Depends(get_client)):
    try:
        return StorageOut(replicated=await is_replicated_storage(client))
    except Exception as e:
        raise http_error(e, "checking user directory storage")
