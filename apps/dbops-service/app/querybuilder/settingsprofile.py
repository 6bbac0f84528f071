from .base import NoChangeError, QueryBuilder, QueryBuilderError, require, render
from .setting import SettingDef
from .utils import backtick_all, backtick, quote_all


def _settings_sql(settings: list[SettingDef]) -> str:
    try:
        return ", ".join(s.sql() for s in settings)
    except QueryBuilderError as e:
        raise QueryBuilderError(f"invalid setting: {e}") from e


class CreateSettingsProfile(QueryBuilder):
    """CREATE SETTINGS PROFILE `p` [ON CLUSTER 'c'] [SETTINGS ...] [INHERIT 'a', 'b'];"""

    def __init__(self, name: str):
        super().__init__()
        self.name = name
        self.settings: list[SettingDef] = []
        self.inherit: list[str] = []

    def add_setting(self, name: str, value: str | None = None, min: str | None = None,
                    max: str | None = None, writability: str | None = None) -> "CreateSettingsProfile":
        self.settings.append(SettingDef(name, value, min, max, writability))
        return self

    def inherit_from(self, profile_names: list[str] | None) -> "CreateSettingsProfile":
        self.inherit = list(profile_names or [])
        return self

    def build(self) -> str:
        require(self.name, "profile name cannot be empty for CREATE SETTINGS PROFILE queries")
        tokens = ["CREATE", "SETTINGS PROFILE", backtick(self.name)] + self._on_cluster()
        if self.settings:
            tokens += ["SETTINGS", _settings_sql(self.settings)]
        if self.inherit:
            tokens += ["INHERIT", ", ".join(quote_all(self.inherit))]
        return render(tokens)


class AlterSettingsProfile(QueryBuilder):
    """ALTER SETTINGS PROFILE with rename, setting add/drop and inheritance replacement.

    ``inherit_from`` replaces the whole inheritance list, so it also drops every
    profile currently inherited.
    """

    def __init__(self, name: str):
        super().__init__()
        self.name = name
        self.new_name: str | None = None
        self.settings: list[SettingDef] = []
        self.remove_settings: list[str] = []
        self.drop_all_profiles = False
        self.inherit: list[str] = []

    def rename_to(self, new_name: str | None) -> "AlterSettingsProfile":
        self.new_name = new_name
        return self

    def add_setting(self, name: str, value: str | None = None, min: str | None = None,
                    max: str | None = None, writability: str | None = None) -> "AlterSettingsProfile":
        self.settings.append(SettingDef(name, value, min, max, writability))
        return self

    def remove_setting(self, name: str) -> "AlterSettingsProfile":
        self.remove_settings.append(name)
        return self

    def inherit_from(self, profile_names: list[str] | None) -> "AlterSettingsProfile":
        self.drop_all_profiles = True
        self.inherit = list(profile_names or [])
        return self

    def build(self) -> str:
        require(self.name, "profile name cannot be empty for ALTER SETTINGS PROFILE queries")

        tokens = ["ALTER", "SETTINGS PROFILE", backtick(self.name)]
        renamed = self.new_name is not None and self.new_name != self.name
        if renamed:
            tokens += ["RENAME", "TO", backtick(self.new_name)]
        tokens += self._on_cluster()

        if not (renamed or self.drop_all_profiles or self.remove_settings or self.settings):
            raise NoChangeError()

        if self.drop_all_profiles:
            tokens.append("DROP ALL PROFILES")
        if self.remove_settings:
            tokens += ["DROP", "SETTINGS", ", ".join(backtick_all(self.remove_settings))]
        if self.settings:
            tokens += ["ADD", "SETTINGS", _settings_sql(self.settings)]
        if self.inherit:
            tokens += ["INHERIT", ", ".join(quote_all(self.inherit))]
        return render(tokens)
