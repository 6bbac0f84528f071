from typing import Optional

from ..clickhouse.client import ClickHouseClient
from ..clickhouse.row import Row
from ..querybuilder import AlterSettingsProfile, Field, Select, WhereEquals
from .base import execute, select_one
from .errors import NotFoundError
from .models import Setting, SettingsProfile
from .settingsprofile import ELEMENTS, get_settings_profile


async def _require_profile(client: ClickHouseClient, profile_id: str,
                           cluster_name: Optional[str]) -> SettingsProfile:
    profile = await get_settings_profile(client, profile_id, cluster_name=cluster_name)
    if profile is None:
        raise NotFoundError(f"settings profile with id {profile_id!r} was not found")
    return profile


async def create_setting(client: ClickHouseClient, profile_id: str, setting: Setting,
                         cluster_name: Optional[str] = None) -> Optional[Setting]:
    profile = await _require_profile(client, profile_id, cluster_name)
    builder = (
        AlterSettingsProfile(profile.name)
        .with_cluster(cluster_name)
        .add_setting(setting.name, setting.value, setting.min, setting.max, setting.writability)
    )
    await execute(client, builder)
    return await get_setting(client, profile_id, setting.name, cluster_name=cluster_name)


async def get_setting(client: ClickHouseClient, profile_id: str, name: str,
                      cluster_name: Optional[str] = None) -> Optional[Setting]:
    profile = await get_settings_profile(client, profile_id, cluster_name=cluster_name)
    if profile is None:
        return None

    query = (
        Select(
            [Field("value"), Field("min"), Field("max"), Field("writability").to_string()],
            ELEMENTS,
        )
        .with_cluster(cluster_name)
        .where(WhereEquals("profile_name", profile.name), WhereEquals("setting_name", name))
    )

    def scan(row: Row) -> Setting:
        return Setting.model_construct(
            name=name,
            value=row.get_nullable_string("value"),
            min=row.get_nullable_string("min"),
            max=row.get_nullable_string("max"),
            writability=row.get_nullable_string("writability"),
        )

    return await select_one(client, query, scan)


async def delete_setting(client: ClickHouseClient, profile_id: str, name: str,
                         cluster_name: Optional[str] = None) -> None:
    profile = await _require_profile(client, profile_id, cluster_name)
    await execute(client, AlterSettingsProfile(profile.name).with_cluster(cluster_name).remove_setting(name))
