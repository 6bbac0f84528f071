"""GRANT / REVOKE builders for privileges and roles.

Access types are keywords and cannot be quoted, so they are checked against a
strict pattern instead.
"""

import re

from .base import QueryBuilder, QueryBuilderError, require, render
from .utils import backtick

_ACCESS_TYPE = re.compile(r"^[A-Za-z][A-Za-z_ ]{0,63}$")


def _access_type(access_type: str, column: str | None) -> str:
    require(access_type, "access type cannot be empty")
    if not _ACCESS_TYPE.match(access_type):
        raise QueryBuilderError(f"invalid access type: {access_type!r}")
    if column:
        return f"{access_type}({backtick(column)})"
    return access_type


def _target(database: str | None, table: str | None) -> str:
    if database is None:
        return "*.*"
    if table is None:
        return f"{backtick(database)}.*"
    return f"{backtick(database)}.{backtick(table)}"


class _PrivilegeStatement(QueryBuilder):
    def __init__(self, access_type: str, grantee: str):
        super().__init__()
        self.access_type = access_type
        self.grantee = grantee
        self.database: str | None = None
        self.table: str | None = None
        self.column: str | None = None

    def with_database(self, database: str | None):
        self.database = database
        return self

    def with_table(self, table: str | None):
        self.table = table
        return self

    def with_column(self, column: str | None):
        self.column = column
        return self

    def _tokens(self, verb: str, preposition: str) -> list[str]:
        privilege = _access_type(self.access_type, self.column)
        require(self.grantee, "grantee cannot be empty")
        return [verb] + self._on_cluster() + [
            privilege,
            "ON",
            _target(self.database, self.table),
            preposition,
            backtick(self.grantee),
        ]


class GrantPrivilege(_PrivilegeStatement):
    def __init__(self, access_type: str, grantee: str):
        super().__init__(access_type, grantee)
        self.grant_option = False

    def with_grant_option(self, grant_option: bool) -> "GrantPrivilege":
        self.grant_option = grant_option
        return self

    def build(self) -> str:
        tokens = self._tokens("GRANT", "TO")
        if self.grant_option:
            tokens.append("WITH GRANT OPTION")
        return render(tokens)


class RevokePrivilege(_PrivilegeStatement):
    def build(self) -> str:
        return render(self._tokens("REVOKE", "FROM"))


class GrantRole(QueryBuilder):
    def __init__(self, role_name: str, grantee: str):
        super().__init__()
        self.role_name = role_name
        self.grantee = grantee
        self.admin_option = False

    def with_admin_option(self, admin_option: bool) -> "GrantRole":
        self.admin_option = admin_option
        return self

    def build(self) -> str:
        require(self.role_name, "role name cannot be empty")
        require(self.grantee, "grantee cannot be empty")
        tokens = ["GRANT"] + self._on_cluster() + [backtick(self.role_name), "TO", backtick(self.grantee)]
        if self.admin_option:
            tokens.append("WITH ADMIN OPTION")
        return render(tokens)


class RevokeRole(QueryBuilder):
    def __init__(self, role_name: str, grantee: str):
        super().__init__()
        self.role_name = role_name
        self.grantee = grantee

    def build(self) -> str:
        require(self.role_name, "role name cannot be empty")
        require(self.grantee, "grantee cannot be empty")
        return render(["REVOKE"] + self._on_cluster() + [backtick(self.role_name), "FROM", backtick(self.grantee)])
