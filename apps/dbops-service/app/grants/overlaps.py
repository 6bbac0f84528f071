"""Finds existing grants that already cover a requested one.

ClickHouse silently skips a GRANT whose scope is already included in a broader
grant to the same grantee. These helpers work out which grants did that and
describe them.
"""

from typing import Optional

from ..dbops.models import GrantPrivilege
from .reference import PrivilegeReference, load_reference

WILDCARD = "*"


def _privilege_matches(candidate: str, existing: str, reference: PrivilegeReference) -> bool:
    # only a broader existing group covers a narrower candidate, never the reverse
    return candidate == existing or candidate in reference.members(existing)


def _scope_matches(candidate: Optional[str], existing: Optional[str]) -> bool:
    """Database/table rule: None is "all", trailing ``*`` is a prefix wildcard."""
    if existing is None:
        return True
    if candidate is None:
        return False
    if candidate == existing:
        return True
    if candidate.endswith(WILDCARD) and existing.endswith(WILDCARD):
        return candidate.startswith(existing[:-1])
    return False


def _column_matches(candidate: Optional[str], existing: Optional[str]) -> bool:
    if existing is None:
        return True
    return candidate == existing


def overlaps(candidate: GrantPrivilege, existing: GrantPrivilege,
             reference: PrivilegeReference | None = None) -> bool:
    """True when ``existing`` already includes everything ``candidate`` asks for."""
    ref = reference or load_reference()
    return (
        _privilege_matches(candidate.access_type, existing.access_type, ref)
        and _scope_matches(candidate.database_name, existing.database_name)
        and _scope_matches(candidate.table_name, existing.table_name)
        and _column_matches(candidate.column_name, existing.column_name)
        and candidate.grantee_user_name == existing.grantee_user_name
        and candidate.grantee_role_name == existing.grantee_role_name
    )


def _q(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def explain_overlap(candidate: GrantPrivilege, existing: GrantPrivilege) -> str:
    if candidate.access_type != existing.access_type:
        row = f"- Broader privilege {_q(existing.access_type)} (which includes {_q(candidate.access_type)}) is already granted"
    else:
        row = f"- Privilege {_q(existing.access_type)} is already granted"

    if existing.table_name is not None:
        row += f" on table {_q(existing.table_name)}"
    else:
        row += " on all tables"

    if existing.database_name is not None:
        row += f" in the {_q(existing.database_name)} database"

    if existing.grantee_user_name is not None:
        row += f" to user {_q(existing.grantee_user_name)}"
    if existing.grantee_role_name is not None:
        row += f" to role {_q(existing.grantee_role_name)}"

    if candidate.grant_option != existing.grant_option:
        row += " with grant option" if existing.grant_option else " without grant option"
    return row


def find_overlaps(candidate: GrantPrivilege, existing: list[GrantPrivilege],
                  reference: PrivilegeReference | None = None) -> list[GrantPrivilege]:
    ref = reference or load_reference()
    return [e for e in existing if overlaps(candidate, e, ref)]
