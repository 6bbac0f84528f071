import logging
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth import verify_internal_key
from ..clickhouse.client import ClickHouseClient
from ..connection import get_client
from ..dbops import user as ops
from ..dbops.models import User
from ..dbops.replicated import warn_if_cluster_on_replicated
from ..schemas import UserCreate, UserUpdate
from .common import http_error, not_found

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(verify_internal_key)])


@router.post("", response_model=User, status_code=201)
async def create_user(body: UserCreate, client: ClickHouseClient = Depends(get_client)):
    user = User(
        name=body.name,
        password_sha256_hash=body.password_sha256_hash,
        settings_profile=body.settings_profile,
    )
    try:
        await warn_if_cluster_on_replicated(client, body.cluster_name, f"user {body.name!r}")
        created = await ops.create_user(client, user, cluster_name=body.cluster_name)
    except Exception as e:
        raise http_error(e, "creating user")
    if created is None:
        raise not_found("User")
    return created


@router.get("", response_model=User)
async def find_user(name: str, cluster_name: Optional[str] = None,
                    client: ClickHouseClient = Depends(get_client)):
    try:
        user = await ops.find_user_by_name(client, name, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "looking up user")
    if user is None:
        raise not_found("User")
    return user


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, cluster_name: Optional[str] = None,
                   client: ClickHouseClient = Depends(get_client)):
    try:
        user = await ops.get_user(client, user_id, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "reading user")
    if user is None:
        raise not_found("User")
    return user


@router.patch("/{user_id}", response_model=User)
async def update_user(user_id: str, body: UserUpdate, client: ClickHouseClient = Depends(get_client)):
    user = User(id=user_id, name=body.name, settings_profile=body.settings_profile)
    try:
        updated = await ops.update_user(client, user, cluster_name=body.cluster_name)
    except Exception as e:
        raise http_error(e, "updating user")
    if updated is None:
        raise not_found("User")
    return updated


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: str, cluster_name: Optional[str] = None,
                      client: ClickHouseClient = Depends(get_client)):
    try:
        await ops.delete_user(client, user_id, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "deleting user")
