import logging
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth import verify_internal_key
from ..clickhouse.client import ClickHouseClient
from ..connection import get_client
from ..dbops import role as ops
from ..dbops.models import Role
from ..dbops.replicated import warn_if_cluster_on_replicated
from ..schemas import RoleCreate, RoleUpdate
from .common import http_error, not_found

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/roles", tags=["roles"], dependencies=[Depends(verify_internal_key)])


@router.post("", response_model=Role, status_code=201)
async def create_role(body: RoleCreate, client: ClickHouseClient = Depends(get_client)):
    try:
        await warn_if_cluster_on_replicated(client, body.cluster_name, f"role {body.name!r}")
        created = await ops.create_role(client, Role(name=body.name), cluster_name=body.cluster_name)
    except Exception as e:
        raise http_error(e, "creating role")
    if created is None:
        raise not_found("Role")
    return created


@router.get("", response_model=Role)
async def find_role(name: str, cluster_name: Optional[str] = None,
                    client: ClickHouseClient = Depends(get_client)):
    try:
        role = await ops.find_role_by_name(client, name, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "looking up role")
    if role is None:
        raise not_found("Role")
    return role


@router.get("/{role_id}", response_model=Role)
async def get_role(role_id: str, cluster_name: Optional[str] = None,
                   client: ClickHouseClient = Depends(get_client)):
    try:
        role = await ops.get_role(client, role_id, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "reading role")
    if role is None:
        raise not_found("Role")
    return role


@router.patch("/{role_id}", response_model=Role)
async def update_role(role_id: str, body: RoleUpdate, client: ClickHouseClient = Depends(get_client)):
    try:
        role = await ops.update_role(client, Role(id=role_id, name=body.name), cluster_name=body.cluster_name)
    except Exception as e:
        raise http_error(e, "updating role")
    if role is None:
        raise not_found("Role")
    return role


@router.delete("/{role_id}", status_code=204)
async def delete_role(role_id: str, cluster_name: Optional[str] = None,
                      client: ClickHouseClient = Depends(get_client)):
    try:
        await ops.delete_role(client, role_id, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "deleting role")
