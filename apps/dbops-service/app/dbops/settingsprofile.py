from typing import Optional

from ..clickhouse.client import ClickHouseClient
from ..clickhouse.row import Row
from ..querybuilder import (
    AlterSettingsProfile,
    CreateSettingsProfile,
    Field,
    OrderDirection,
    Select,
    WhereEquals,
    drop_settings_profile,
)
from .base import execute, select, select_one
from .models import Setting, SettingsProfile

TABLE = "system.settings_profiles"
ELEMENTS = "system.settings_profile_elements"


async def create_settings_profile(client: ClickHouseClient, profile: SettingsProfile,
                                  cluster_name: Optional[str] = None) -> Optional[SettingsProfile]:
    builder = CreateSettingsProfile(profile.name).with_cluster(cluster_name).inherit_from(profile.inherit_from)
    for s in profile.settings:
        builder.add_setting(s.name, s.value, s.min, s.max, s.writability)
    await execute(client, builder)
    return await find_settings_profile_by_name(client, profile.name, cluster_name=cluster_name)


def _scan_element(row: Row) -> tuple[Optional[str], Optional[Setting]]:
    inherited = row.get_nullable_string("inherit_profile")
    setting_name = row.get_nullable_string("setting_name")
    if setting_name is None:
        return inherited, None
    # read back as-is; the server may hold constraints this service would not create
    setting = Setting.model_construct(
        name=setting_name,
        value=row.get_nullable_string("value"),
        min=row.get_nullable_string("min"),
        max=row.get_nullable_string("max"),
        writability=row.get_nullable_string("writability"),
    )
    return inherited, setting


async def get_settings_profile(client: ClickHouseClient, id: str,
                               cluster_name: Optional[str] = None) -> Optional[SettingsProfile]:
    query = Select([Field("name")], TABLE).with_cluster(cluster_name).where(WhereEquals("id", id))
    name = await select_one(client, query, lambda row: row.get_string("name"))
    if name is None:
        return None

    query = (
        Select(
            [
                Field("inherit_profile"),
                Field("setting_name"),
                Field("value"),
                Field("min"),
                Field("max"),
                Field("writability").to_string(),
            ],
            ELEMENTS,
        )
        .with_cluster(cluster_name)
        .where(WhereEquals("profile_name", name))
        .order_by(Field("index"), OrderDirection.ASC)
    )
    profile = SettingsProfile(id=id, name=name)
    for inherited, setting in await select(client, query, _scan_element):
        if inherited is not None:
            profile.inherit_from.append(inherited)
        if setting is not None:
            profile.settings.append(setting)
    return profile


async def update_settings_profile(client: ClickHouseClient, profile: SettingsProfile,
                                  cluster_name: Optional[str] = None) -> Optional[SettingsProfile]:
    """Rename and/or replace the inheritance list of ``profile.id``.

    Settings are managed one by one through the setting operations.
    """
    existing = await get_settings_profile(client, profile.id, cluster_name=cluster_name)
    if existing is None:
        return None

    builder = AlterSettingsProfile(existing.name).with_cluster(cluster_name)
    changed = False
    if profile.name != existing.name:
        builder.rename_to(profile.name)
        changed = True
    if profile.inherit_from != existing.inherit_from:
        builder.inherit_from(profile.inherit_from)
        changed = True
    if not changed:
        return existing

    await execute(client, builder)
    return await get_settings_profile(client, profile.id, cluster_name=cluster_name)


async def delete_settings_profile(client: ClickHouseClient, id: str,
                                  cluster_name: Optional[str] = None) -> None:
    profile = await get_settings_profile(client, id, cluster_name=cluster_name)
    if profile is None:
        return
    await execute(client, drop_settings_profile(profile.name).with_cluster(cluster_name))


async def find_settings_profile_by_name(client: ClickHouseClient, name: str,
                                        cluster_name: Optional[str] = None) -> Optional[SettingsProfile]:
    query = (
        Select([Field("id").to_string()], TABLE)
        .with_cluster(cluster_name)
        .where(WhereEquals("name", name))
    )
    id = await select_one(client, query, lambda row: row.get_string("id"))
    if id is None:
        return None
    return await get_settings_profile(client, id, cluster_name=cluster_name)
