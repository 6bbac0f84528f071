"""Common pieces shared by every statement builder.

Builders are small mutable objects configured through chained calls and
rendered once with ``build()``. They are not safe for concurrent
configuration: create one per statement and do not share it between tasks.
"""

from .utils import quote


class QueryBuilderError(ValueError):
    """Raised when a builder is missing required input or has nothing to render."""


class NoChangeError(QueryBuilderError):
    """Raised by ALTER builders whose diff is empty."""

    def __init__(self, message: str = "no change to be made"):
        super().__init__(message)


def require(value: str | None, message: str) -> None:
    if value is None or value == "":
        raise QueryBuilderError(message)


def render(tokens: list[str]) -> str:
    return " ".join(tokens) + ";"


class QueryBuilder:
    """Base for all builders; subclasses implement ``build``."""

    def __init__(self):
        self.cluster_name: str | None = None

    def with_cluster(self, cluster_name: str | None):
        self.cluster_name = cluster_name
        return self

    def _on_cluster(self) -> list[str]:
        if self.cluster_name is None:
            return []
        return ["ON", "CLUSTER", quote(self.cluster_name)]

    def build(self) -> str:
        raise NotImplementedError
