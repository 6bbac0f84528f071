from enum import Enum

from .base import QueryBuilder, QueryBuilderError, render
from .field import Field
from .utils import qualified_name, quote
from .where import AndWhere, Where


class OrderDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class Select(QueryBuilder):
    """SELECT <fields> FROM <table> [WHERE (...)] [ORDER BY <field> ASC|DESC].

    With a cluster name the table is read through the ``cluster()`` table
    function so every replica's view is included.
    """

    def __init__(self, fields: list[Field], table_name: str):
        super().__init__()
        self.fields = fields
        self.table_name = table_name
        self.where_clause: Where | None = None
        self.order_by_field: Field | None = None
        self.order_direction = OrderDirection.ASC

    def where(self, *clauses: Where) -> "Select":
        self.where_clause = AndWhere(*clauses)
        return self

    def order_by(self, field: Field, direction: OrderDirection = OrderDirection.ASC) -> "Select":
        self.order_by_field = field
        self.order_direction = direction
        return self

    def build(self) -> str:
        if not self.table_name:
            raise QueryBuilderError("table name cannot be empty for SELECT queries")
        if not self.fields:
            raise QueryBuilderError("at least one field is required for SELECT queries")

        source = qualified_name(self.table_name)
        if self.cluster_name is not None:
            source = f"cluster({quote(self.cluster_name)}, {source})"

        tokens = [
            "SELECT",
            ", ".join(f.sql() for f in self.fields),
            "FROM",
            source,
        ]
        if self.where_clause is not None:
            tokens += ["WHERE", self.where_clause.clause()]
        if self.order_by_field is not None:
            tokens += ["ORDER BY", self.order_by_field.sql(), OrderDirection(self.order_direction).value]
        return render(tokens)
