from enum import Enum

from .base import QueryBuilder, require, render
from .principal import AlterPrincipal
from .utils import backtick, quote


class Identification(str, Enum):
    SHA256_HASH = "sha256_hash"


class CreateUser(QueryBuilder):
    """CREATE USER `name` [ON CLUSTER 'c'] [IDENTIFIED WITH ... BY '...'] [SETTINGS PROFILE 'p'];"""

    def __init__(self, name: str):
        super().__init__()
        self.name = name
        self.identification: tuple[Identification, str] | None = None
        self.settings_profile: str | None = None

    def identified(self, with_: Identification, by: str) -> "CreateUser":
        self.identification = (Identification(with_), by)
        return self

    def with_settings_profile(self, profile_name: str | None) -> "CreateUser":
        self.settings_profile = profile_name
        return self

    def build(self) -> str:
        require(self.name, "user name cannot be empty for CREATE USER queries")
        tokens = ["CREATE", "USER", backtick(self.name)] + self._on_cluster()
        if self.identification is not None:
            method, secret = self.identification
            tokens += ["IDENTIFIED", "WITH", method.value, "BY", quote(secret)]
        if self.settings_profile is not None:
            tokens += ["SETTINGS", "PROFILE", quote(self.settings_profile)]
        return render(tokens)


class AlterUser(AlterPrincipal):
    kind = "USER"
    add_profile_keyword = "PROFILES"
