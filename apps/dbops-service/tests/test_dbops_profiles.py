"""Settings profiles, their settings and their attachment to roles and users."""

import logging

import pytest

from app.dbops import association, replicated, setting, settingsprofile
from app.dbops.errors import InvalidRequestError, NotFoundError
from app.dbops.models import Setting, SettingsProfile

NULL = "\\N"
PROFILE_ID = "4f1a6b3c-0000-4000-8000-000000000004"
ROLE_ID = "2f1a6b3c-0000-4000-8000-000000000002"
USER_ID = "3f1a6b3c-0000-4000-8000-000000000003"


def _element(inherit_profile=NULL, setting_name=NULL, value=NULL, min=NULL, max=NULL, writability=NULL):
    return {
        "inherit_profile": inherit_profile,
        "setting_name": setting_name,
        "value": value,
        "min": min,
        "max": max,
        "writability": writability,
    }


@pytest.fixture
def limited_profile(fake_ch):
    fake_ch.respond("WHERE (`name` = 'limited')", {"id": PROFILE_ID})
    fake_ch.respond("`system`.`settings_profiles`", {"name": "limited"})
    return fake_ch


# ── Profiles ──────────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_settings_profile(limited_profile):
    fake_ch = limited_profile
    fake_ch.respond(
        "`profile_name` = 'limited'",
        _element(inherit_profile="default"),
        _element(setting_name="max_memory_usage", value="1000", writability="CONST"),
    )

    created = await settingsprofile.create_settings_profile(
        fake_ch,
        SettingsProfile(
            name="limited",
            inherit_from=["default"],
            settings=[Setting(name="max_memory_usage", value="1000", writability="CONST")],
        ),
    )

    assert fake_ch.executed == [
        "CREATE SETTINGS PROFILE `limited` SETTINGS `max_memory_usage` = '1000' CONST INHERIT 'default';",
    ]
    assert created.id == PROFILE_ID
    assert created.inherit_from == ["default"]
    [s] = created.settings
    assert (s.name, s.value, s.min, s.max, s.writability) == ("max_memory_usage", "1000", None, None, "CONST")


@pytest.mark.asyncio
async def test_profile_elements_are_read_in_order(limited_profile):
    await settingsprofile.get_settings_profile(limited_profile, PROFILE_ID)
    assert limited_profile.statements[-1] == (
        "SELECT `inherit_profile`, `setting_name`, `value`, `min`, `max`, "
        "toString(`writability`) AS `writability` FROM `system`.`settings_profile_elements` "
        "WHERE (`profile_name` = 'limited') ORDER BY `index` ASC;"
    )


@pytest.mark.asyncio
async def test_update_settings_profile_replaces_inheritance(limited_profile):
    limited_profile.respond("`profile_name` = 'limited'", _element(inherit_profile="default"))

    await settingsprofile.update_settings_profile(
        limited_profile, SettingsProfile(id=PROFILE_ID, name="capped", inherit_from=["readonly"]),
        cluster_name="main",
    )

    assert limited_profile.executed == [
        "ALTER SETTINGS PROFILE `limited` RENAME TO `capped` ON CLUSTER 'main' "
        "DROP ALL PROFILES INHERIT 'readonly';",
    ]


@pytest.mark.asyncio
async def test_update_settings_profile_without_change(limited_profile):
    limited_profile.respond("`profile_name` = 'limited'", _element(inherit_profile="default"))

    unchanged = await settingsprofile.update_settings_profile(
        limited_profile, SettingsProfile(id=PROFILE_ID, name="limited", inherit_from=["default"]),
    )

    assert unchanged.name == "limited"
    assert limited_profile.executed == []


@pytest.mark.asyncio
async def test_update_settings_profile_clears_inheritance(limited_profile):
    limited_profile.respond("`profile_name` = 'limited'", _element(inherit_profile="default"))

    await settingsprofile.update_settings_profile(
        limited_profile, SettingsProfile(id=PROFILE_ID, name="limited", inherit_from=[]),
    )

    assert limited_profile.executed == ["ALTER SETTINGS PROFILE `limited` DROP ALL PROFILES;"]


@pytest.mark.asyncio
async def test_delete_settings_profile(limited_profile):
    await settingsprofile.delete_settings_profile(limited_profile, PROFILE_ID)
    assert limited_profile.executed == ["DROP SETTINGS PROFILE `limited`;"]


@pytest.mark.asyncio
async def test_missing_profile_is_none(fake_ch):
    assert await settingsprofile.get_settings_profile(fake_ch, PROFILE_ID) is None
    assert await settingsprofile.update_settings_profile(fake_ch, SettingsProfile(id=PROFILE_ID, name="x")) is None


# ── Settings ──────────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_setting(fake_ch):
    fake_ch.respond("`setting_name` = 'max_threads'", {"value": NULL, "min": NULL, "max": "8", "writability": NULL})
    fake_ch.respond("`system`.`settings_profiles`", {"name": "limited"})

    created = await setting.create_setting(fake_ch, PROFILE_ID, Setting(name="max_threads", max="8"))

    assert fake_ch.executed == ["ALTER SETTINGS PROFILE `limited` ADD SETTINGS `max_threads` MAX '8';"]
    assert (created.name, created.value, created.max) == ("max_threads", None, "8")


@pytest.mark.asyncio
async def test_create_setting_on_missing_profile(fake_ch):
    with pytest.raises(NotFoundError):
        await setting.create_setting(fake_ch, PROFILE_ID, Setting(name="max_threads", value="4"))
    assert fake_ch.executed == []


@pytest.mark.asyncio
async def test_get_missing_setting(fake_ch):
    fake_ch.respond("`system`.`settings_profiles`", {"name": "limited"})
    assert await setting.get_setting(fake_ch, PROFILE_ID, "max_threads") is None


@pytest.mark.asyncio
async def test_delete_setting(fake_ch):
    fake_ch.respond("`system`.`settings_profiles`", {"name": "limited"})
    await setting.delete_setting(fake_ch, PROFILE_ID, "max_threads")
    assert fake_ch.executed == ["ALTER SETTINGS PROFILE `limited` DROP SETTINGS `max_threads`;"]


# ── Associations ──────────────────────────────────────────

@pytest.mark.asyncio
async def test_associate_profile_with_role(limited_profile):
    limited_profile.respond("`system`.`roles`", {"name": "reader"})

    await association.associate_settings_profile(limited_profile, PROFILE_ID, role_id=ROLE_ID)

    assert limited_profile.executed == ["ALTER ROLE `reader` ADD PROFILE 'limited';"]


@pytest.mark.asyncio
async def test_associate_and_disassociate_user(limited_profile):
    limited_profile.respond("`system`.`users`", {"name": "alice"})

    await association.associate_settings_profile(limited_profile, PROFILE_ID, user_id=USER_ID)
    await association.disassociate_settings_profile(limited_profile, PROFILE_ID, user_id=USER_ID)

    assert limited_profile.executed == [
        "ALTER USER `alice` ADD PROFILES 'limited';",
        "ALTER USER `alice` DROP PROFILES 'limited';",
    ]


@pytest.mark.asyncio
async def test_association_needs_exactly_one_target(fake_ch):
    with pytest.raises(InvalidRequestError):
        await association.associate_settings_profile(fake_ch, PROFILE_ID, role_id=ROLE_ID, user_id=USER_ID)
    with pytest.raises(InvalidRequestError):
        await association.get_settings_profile_association(fake_ch, PROFILE_ID)
    assert fake_ch.statements == []


@pytest.mark.asyncio
async def test_association_with_missing_role(limited_profile):
    with pytest.raises(NotFoundError, match="role"):
        await association.associate_settings_profile(limited_profile, PROFILE_ID, role_id=ROLE_ID)


@pytest.mark.asyncio
async def test_get_association(limited_profile):
    limited_profile.respond("`system`.`roles`", {"name": "reader"})
    limited_profile.respond("`role_name` = 'reader'", {"inherit_profile": "limited"})
    limited_profile.respond("`system`.`users`", {"name": "alice"})

    assert await association.get_settings_profile_association(limited_profile, PROFILE_ID, role_id=ROLE_ID)
    assert not await association.get_settings_profile_association(limited_profile, PROFILE_ID, user_id=USER_ID)


# ── Access storage ────────────────────────────────────────

@pytest.mark.asyncio
async def test_replicated_storage_uses_lowest_precedence(fake_ch):
    fake_ch.respond(
        "`system`.`user_directories`",
        {"type": "local_directory", "precedence": "1"},
        {"type": "replicated", "precedence": "0"},
    )

    assert await replicated.is_replicated_storage(fake_ch) is True
    assert fake_ch.statements == [
        "SELECT `type`, `precedence` FROM `system`.`user_directories` WHERE (`type` <> 'users_xml');",
    ]


@pytest.mark.asyncio
async def test_users_xml_is_ignored(fake_ch):
    fake_ch.respond(
        "`system`.`user_directories`",
        {"type": "users_xml", "precedence": "0"},
        {"type": "local_directory", "precedence": "1"},
    )

    directories = await replicated.list_user_directories(fake_ch)

    assert [d.type for d in directories] == ["local_directory"]
    assert await replicated.is_replicated_storage(fake_ch) is False


@pytest.mark.asyncio
async def test_no_directories_is_not_replicated(fake_ch):
    assert await replicated.is_replicated_storage(fake_ch) is False


@pytest.mark.asyncio
async def test_cluster_on_replicated_storage_warns(fake_ch, caplog):
    fake_ch.respond("`system`.`user_directories`", {"type": "replicated", "precedence": "0"})

    assert await replicated.warn_if_cluster_on_replicated(fake_ch, None, "role") is False
    assert fake_ch.statements == []

    with caplog.at_level(logging.WARNING, logger="app.dbops.replicated"):
        assert await replicated.warn_if_cluster_on_replicated(fake_ch, "main", "role") is True
    assert "replicated storage" in caplog.text


@pytest.mark.asyncio
async def test_failed_storage_check_only_warns(fake_ch, caplog):
    fake_ch.fail("user_directories")

    with caplog.at_level(logging.WARNING, logger="app.dbops.replicated"):
        assert await replicated.warn_if_cluster_on_replicated(fake_ch, "main", "role") is False
    assert "Could not check user directory storage" in caplog.text
