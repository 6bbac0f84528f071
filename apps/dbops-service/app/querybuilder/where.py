"""WHERE predicates used by the SELECT builder."""

from .utils import backtick, quote


def _value(value) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return quote(value)
    return str(value)


class Where:
    def clause(self) -> str:
        raise NotImplementedError


class _Comparison(Where):
    operator = "="

    def __init__(self, field: str, value):
        self.field = field
        self.value = value

    def clause(self) -> str:
        return f"{backtick(self.field)} {self.operator} {_value(self.value)}"


class WhereEquals(_Comparison):
    operator = "="


class WhereDiffers(_Comparison):
    operator = "<>"


class IsNull(Where):
    def __init__(self, field: str):
        self.field = field

    def clause(self) -> str:
        return f"{backtick(self.field)} IS NULL"


class AndWhere(Where):
    """Conjunction of clauses, always wrapped in one pair of parentheses."""

    def __init__(self, *clauses: Where):
        self.clauses = list(clauses)

    def clause(self) -> str:
        return "(" + " AND ".join(c.clause() for c in self.clauses) + ")"
