import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from ..auth import verify_internal_key
from ..clickhouse.client import ClickHouseClient
from ..connection import get_client
from ..dbops import grantprivilege as privilege_ops
from ..dbops import grantrole as role_ops
from ..dbops.models import GrantPrivilege, GrantRole
from ..grants.reference import validate_grant
from ..schemas import GrantPrivilegeCreate, GrantRoleCreate
from .common import http_error, not_found

logger = logging.getLogger(__name__)

router = APIRouter(tags=["grants"], dependencies=[Depends(verify_internal_key)])


# ───────── Role grants ────────────────────────────────────────

@router.post("/grant-roles", response_model=GrantRole, status_code=201)
async def grant_role(body: GrantRoleCreate, client: ClickHouseClient = Depends(get_client)):
    grant = GrantRole(**body.model_dump(exclude={"cluster_name"}))
    try:
        created = await role_ops.grant_role(client, grant, cluster_name=body.cluster_name)
    except Exception as e:
        raise http_error(e, "granting role")
    if created is None:
        raise not_found("Role grant")
    return created


@router.get("/grant-roles", response_model=GrantRole)
async def get_grant_role(role_name: str, grantee_user_name: Optional[str] = None,
                         grantee_role_name: Optional[str] = None, cluster_name: Optional[str] = None,
                         client: ClickHouseClient = Depends(get_client)):
    try:
        grant = await role_ops.get_grant_role(
            client, role_name, grantee_user_name, grantee_role_name, cluster_name=cluster_name,
        )
    except Exception as e:
        raise http_error(e, "reading role grant")
    if grant is None:
        raise not_found("Role grant")
    return grant


@router.delete("/grant-roles", status_code=204)
async def revoke_grant_role(role_name: str, grantee_user_name: Optional[str] = None,
                            grantee_role_name: Optional[str] = None, cluster_name: Optional[str] = None,
                            client: ClickHouseClient = Depends(get_client)):
    try:
        await role_ops.revoke_grant_role(
            client, role_name, grantee_user_name, grantee_role_name, cluster_name=cluster_name,
        )
    except Exception as e:
        raise http_error(e, "revoking role grant")


# ───────── Privilege grants ───────────────────────────────────

@router.post("/grant-privileges", response_model=GrantPrivilege, status_code=201)
async def grant_privilege(body: GrantPrivilegeCreate, client: ClickHouseClient = Depends(get_client)):
    grant = GrantPrivilege(**body.model_dump(exclude={"cluster_name"}))
    try:
        validate_grant(grant.access_type, grant.database_name, grant.table_name, grant.column_name)
        return await privilege_ops.grant_privilege(client, grant, cluster_name=body.cluster_name)
    except Exception as e:
        raise http_error(e, "granting privilege")


@router.get("/grant-privileges", response_model=GrantPrivilege)
async def get_grant_privilege(access_type: str, database: Optional[str] = None, table: Optional[str] = None,
                              column: Optional[str] = None, grantee_user_name: Optional[str] = None,
                              grantee_role_name: Optional[str] = None, cluster_name: Optional[str] = None,
                              client: ClickHouseClient = Depends(get_client)):
    try:
        grant = await privilege_ops.get_grant_privilege(
            client, access_type, database, table, column, grantee_user_name, grantee_role_name,
            cluster_name=cluster_name,
        )
    except Exception as e:
        raise http_error(e, "reading privilege grant")
    if grant is None:
        raise not_found("Privilege grant")
    return grant


@router.get("/grant-privileges/all", response_model=List[GrantPrivilege])
async def list_grants_for_grantee(grantee_user_name: Optional[str] = None,
                                  grantee_role_name: Optional[str] = None, cluster_name: Optional[str] = None,
                                  client: ClickHouseClient = Depends(get_client)):
    try:
        return await privilege_ops.get_all_grants_for_grantee(
            client, grantee_user_name, grantee_role_name, cluster_name=cluster_name,
        )
    except Exception as e:
        raise http_error(e, "listing privilege grants")


@router.delete("/grant-privileges", status_code=204)
async def revoke_grant_privilege(access_type: str, database: Optional[str] = None, table: Optional[str] = None,
                                 column: Optional[str] = None, grantee_user_name: Optional[str] = None,
                                 grantee_role_name: Optional[str] = None, cluster_name: Optional[str] = None,
                                 client: ClickHouseClient = Depends(get_client)):
    try:
        await privilege_ops.revoke_grant_privilege(
            client, access_type, database, table, column, grantee_user_name, grantee_role_name,
            cluster_name=cluster_name,
        )
    except Exception as e:
        raise http_error(e, "revoking privilege grant")
