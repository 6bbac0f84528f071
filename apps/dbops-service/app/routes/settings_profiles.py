import logging
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth import verify_internal_key
from ..clickhouse.client import ClickHouseClient
from ..connection import get_client
from ..dbops import association, setting as setting_ops, settingsprofile as ops
from ..dbops.models import Setting, SettingsProfile
from ..schemas import (
    AssociationOut,
    AssociationRequest,
    SettingCreate,
    SettingsProfileCreate,
    SettingsProfileUpdate,
)
from .common import http_error, not_found

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/settings-profiles",
    tags=["settings-profiles"],
    dependencies=[Depends(verify_internal_key)],
)


# ───────── Profiles ───────────────────────────────────────────

@router.post("", response_model=SettingsProfile, status_code=201)
async def create_settings_profile(body: SettingsProfileCreate, client: ClickHouseClient = Depends(get_client)):
    profile = SettingsProfile(name=body.name, inherit_from=body.inherit_from, settings=body.settings)
    try:
        created = await ops.create_settings_profile(client, profile, cluster_name=body.cluster_name)
    except Exception as e:
        raise http_error(e, "creating settings profile")
    if created is None:
        raise not_found("Settings profile")
    return created


@router.get("", response_model=SettingsProfile)
async def find_settings_profile(name: str, cluster_name: Optional[str] = None,
                                client: ClickHouseClient = Depends(get_client)):
    try:
        profile = await ops.find_settings_profile_by_name(client, name, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "looking up settings profile")
    if profile is None:
        raise not_found("Settings profile")
    return profile


@router.get("/{profile_id}", response_model=SettingsProfile)
async def get_settings_profile(profile_id: str, cluster_name: Optional[str] = None,
                               client: ClickHouseClient = Depends(get_client)):
    try:
        profile = await ops.get_settings_profile(client, profile_id, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "reading settings profile")
    if profile is None:
        raise not_found("Settings profile")
    return profile


@router.patch("/{profile_id}", response_model=SettingsProfile)
async def update_settings_profile(profile_id: str, body: SettingsProfileUpdate,
                                  client: ClickHouseClient = Depends(get_client)):
    profile = SettingsProfile(id=profile_id, name=body.name, inherit_from=body.inherit_from)
    try:
        updated = await ops.update_settings_profile(client, profile, cluster_name=body.cluster_name)
    except Exception as e:
        raise http_error(e, "updating settings profile")
    if updated is None:
        raise not_found("Settings profile")
    return updated


@router.delete("/{profile_id}", status_code=204)
async def delete_settings_profile(profile_id: str, cluster_name: Optional[str] = None,
                                  client: ClickHouseClient = Depends(get_client)):
    try:
        await ops.delete_settings_profile(client, profile_id, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "deleting settings profile")


# ───────── Settings ───────────────────────────────────────────

@router.post("/{profile_id}/settings", response_model=Setting, status_code=201)
async def create_setting(profile_id: str, body: SettingCreate, client: ClickHouseClient = Depends(get_client)):
    setting = Setting(**body.model_dump(exclude={"cluster_name"}))
    try:
        created = await setting_ops.create_setting(client, profile_id, setting, cluster_name=body.cluster_name)
    except Exception as e:
        raise http_error(e, "creating setting")
    if created is None:
        raise not_found("Setting")
    return created


@router.get("/{profile_id}/settings/{name}", response_model=Setting)
async def get_setting(profile_id: str, name: str, cluster_name: Optional[str] = None,
                      client: ClickHouseClient = Depends(get_client)):
    try:
        setting = await setting_ops.get_setting(client, profile_id, name, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "reading setting")
    if setting is None:
        raise not_found("Setting")
    return setting


@router.delete("/{profile_id}/settings/{name}", status_code=204)
async def delete_setting(profile_id: str, name: str, cluster_name: Optional[str] = None,
                         client: ClickHouseClient = Depends(get_client)):
    try:
        await setting_ops.delete_setting(client, profile_id, name, cluster_name=cluster_name)
    except Exception as e:
        raise http_error(e, "deleting setting")


# ───────── Associations ───────────────────────────────────────

@router.post("/{profile_id}/associations", response_model=AssociationOut, status_code=201)
async def associate(profile_id: str, body: AssociationRequest, client: ClickHouseClient = Depends(get_client)):
    try:
        await association.associate_settings_profile(
            client, profile_id, role_id=body.role_id, user_id=body.user_id, cluster_name=body.cluster_name,
        )
    except Exception as e:
        raise http_error(e, "associating settings profile")
    return AssociationOut(settings_profile_id=profile_id, role_id=body.role_id, user_id=body.user_id, associated=True)


@router.get("/{profile_id}/associations", response_model=AssociationOut)
async def get_association(profile_id: str, role_id: Optional[str] = None, user_id: Optional[str] = None,
                          cluster_name: Optional[str] = None, client: ClickHouseClient = Depends(get_client)):
    try:
        associated = await association.get_settings_profile_association(
            client, profile_id, role_id=role_id, user_id=user_id, cluster_name=cluster_name,
        )
    except Exception as e:
        raise http_error(e, "reading settings profile association")
    return AssociationOut(settings_profile_id=profile_id, role_id=role_id, user_id=user_id, associated=associated)


@router.delete("/{profile_id}/associations", status_code=204)
async def disassociate(profile_id: str, role_id: Optional[str] = None, user_id: Optional[str] = None,
                       cluster_name: Optional[str] = None, client: ClickHouseClient = Depends(get_client)):
    try:
        await association.disassociate_settings_profile(
            client, profile_id, role_id=role_id, user_id=user_id, cluster_name=cluster_name,
        )
    except Exception as e:
        raise http_error(e, "disassociating settings profile")
