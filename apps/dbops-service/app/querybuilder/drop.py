from .base import QueryBuilder, require, render
from .utils import backtick

DATABASE = "DATABASE"
ROLE = "ROLE"
USER = "USER"
SETTINGS_PROFILE = "SETTINGS PROFILE"


class Drop(QueryBuilder):
    """DROP <kind> `name` [ON CLUSTER 'c'];"""

    def __init__(self, kind: str, name: str):
        super().__init__()
        self.kind = kind
        self.name = name

    def build(self) -> str:
        require(self.name, f"name cannot be empty for DROP {self.kind} queries")
        return render(["DROP", self.kind, backtick(self.name)] + self._on_cluster())


def drop_database(name: str) -> Drop:
    return Drop(DATABASE, name)


def drop_role(name: str) -> Drop:
    return Drop(ROLE, name)


def drop_user(name: str) -> Drop:
    return Drop(USER, name)


def drop_settings_profile(name: str) -> Drop:
    return Drop(SETTINGS_PROFILE, name)
