"""Attach settings profiles to roles and users.

Exactly one of ``role_id`` / ``user_id`` must be given. A role may carry any
number of profiles, a user carries at most one.
"""

from typing import Optional

from ..clickhouse.client import ClickHouseClient
from ..querybuilder import AlterRole, AlterUser
from .base import execute
from .errors import InvalidRequestError, NotFoundError
from .role import get_role
from .settingsprofile import get_settings_profile
from .user import get_user


def _check_target(role_id: Optional[str], user_id: Optional[str]) -> None:
    if (role_id is None) == (user_id is None):
        raise InvalidRequestError("exactly one of role_id or user_id must be set")


async def _profile_name(client: ClickHouseClient, profile_id: str, cluster_name: Optional[str]) -> str:
    profile = await get_settings_profile(client, profile_id, cluster_name=cluster_name)
    if profile is None:
        raise NotFoundError(f"settings profile with id {profile_id!r} was not found")
    return profile.name


async def _alter_builder(client: ClickHouseClient, role_id: Optional[str], user_id: Optional[str],
                         cluster_name: Optional[str]):
    if role_id is not None:
        role = await get_role(client, role_id, cluster_name=cluster_name)
        if role is None:
            raise NotFoundError(f"role with id {role_id!r} was not found")
        return AlterRole(role.name).with_cluster(cluster_name)

    user = await get_user(client, user_id, cluster_name=cluster_name)
    if user is None:
        raise NotFoundError(f"user with id {user_id!r} was not found")
    return AlterUser(user.name).with_cluster(cluster_name)


async def associate_settings_profile(client: ClickHouseClient, profile_id: str,
                                     role_id: Optional[str] = None, user_id: Optional[str] = None,
                                     cluster_name: Optional[str] = None) -> None:
    _check_target(role_id, user_id)
    name = await _profile_name(client, profile_id, cluster_name)
    builder = await _alter_builder(client, role_id, user_id, cluster_name)
    await execute(client, builder.add_settings_profile(name))


async def disassociate_settings_profile(client: ClickHouseClient, profile_id: str,
                                        role_id: Optional[str] = None, user_id: Optional[str] = None,
                                        cluster_name: Optional[str] = None) -> None:
    _check_target(role_id, user_id)
    name = await _profile_name(client, profile_id, cluster_name)
    builder = await _alter_builder(client, role_id, user_id, cluster_name)
    await execute(client, builder.drop_settings_profile(name))


async def get_settings_profile_association(client: ClickHouseClient, profile_id: str,
                                           role_id: Optional[str] = None, user_id: Optional[str] = None,
                                           cluster_name: Optional[str] = None) -> bool:
    """True when the profile is attached; False if the profile, role or user is gone."""
    _check_target(role_id, user_id)
    profile = await get_settings_profile(client, profile_id, cluster_name=cluster_name)
    if profile is None:
        return False

    if role_id is not None:
        role = await get_role(client, role_id, cluster_name=cluster_name)
        return role is not None and profile.name in role.settings_profiles

    user = await get_user(client, user_id, cluster_name=cluster_name)
    return user is not None and user.settings_profile == profile.name
