"""ALTER ROLE / ALTER USER share one diff-rendering routine."""

from .base import NoChangeError, QueryBuilder, require, render
from .utils import backtick, quote


class AlterPrincipal(QueryBuilder):
    kind = ""
    add_profile_keyword = "PROFILE"

    def __init__(self, name: str):
        super().__init__()
        self.name = name
        self.new_name: str | None = None
        self.old_settings_profile: str | None = None
        self.new_settings_profile: str | None = None

    def rename_to(self, new_name: str | None):
        self.new_name = new_name
        return self

    def drop_settings_profile(self, profile_name: str | None):
        self.old_settings_profile = profile_name
        return self

    def add_settings_profile(self, profile_name: str | None):
        self.new_settings_profile = profile_name
        return self

    def build(self) -> str:
        require(self.name, f"name cannot be empty for ALTER {self.kind} queries")

        changed = False
        tokens = ["ALTER", self.kind, backtick(self.name)]

        # RENAME TO must precede ON CLUSTER in ClickHouse's ALTER grammar.
        if self.new_name is not None and self.new_name != self.name:
            changed = True
            tokens += ["RENAME", "TO", backtick(self.new_name)]

        tokens += self._on_cluster()

        old, new = self.old_settings_profile, self.new_settings_profile
        if old != new:
            changed = True
            if old is not None:
                tokens += ["DROP", "PROFILES", quote(old)]
            if new is not None:
                tokens += ["ADD", self.add_profile_keyword, quote(new)]

        if not changed:
            raise NoChangeError()
        return render(tokens)
