from .base import QueryBuilder, require, render
from .utils import backtick, quote


class CreateDatabase(QueryBuilder):
    def __init__(self, name: str):
        super().__init__()
        self.name = name
        self.comment: str | None = None

    def with_comment(self, comment: str | None) -> "CreateDatabase":
        self.comment = comment
        return self

    def build(self) -> str:
        require(self.name, "database name cannot be empty for CREATE DATABASE queries")
        tokens = ["CREATE", "DATABASE", backtick(self.name)] + self._on_cluster()
        if self.comment:
            tokens += ["COMMENT", quote(self.comment)]
        return render(tokens)
