from .base import QueryBuilder, require, render
from .principal import AlterPrincipal
from .utils import backtick


class CreateRole(QueryBuilder):
    def __init__(self, name: str):
        super().__init__()
        self.name = name

    def build(self) -> str:
        require(self.name, "role name cannot be empty for CREATE ROLE queries")
        return render(["CREATE", "ROLE", backtick(self.name)] + self._on_cluster())


class AlterRole(AlterPrincipal):
    kind = "ROLE"
    add_profile_keyword = "PROFILE"
