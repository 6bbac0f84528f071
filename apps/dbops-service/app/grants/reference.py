"""ClickHouse privilege reference: aliases, groups and scopes.

``grants.tsv`` is the output of ``SHOW PRIVILEGES`` (privilege, aliases,
level, parent group; ``\\N`` marks NULL). It is parsed once per process and
never mutated afterwards.
"""

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Mapping

NULL = "\\N"

GLOBAL = "GLOBAL"
DATABASE_REQUIRED_SCOPES = ("COLUMN", "DICTIONARY", "VIEW")
UNSUPPORTED_SCOPES = ("NAMED_COLLECTION", "USER_NAME", "TABLE ENGINE", "TABLE_ENGINE")


class GrantValidationError(ValueError):
    """The requested grant is not acceptable for this privilege."""


@dataclass(frozen=True)
class PrivilegeReference:
    aliases: Mapping[str, str]
    groups: Mapping[str, tuple[str, ...]]
    scopes: Mapping[str, str]

    def canonical(self, privilege: str) -> str:
        return self.aliases.get(privilege, privilege)

    def is_known(self, privilege: str) -> bool:
        return privilege in self.scopes or privilege in self.aliases or privilege in self.groups

    def members(self, group: str) -> tuple[str, ...]:
        return self.groups.get(group, ())


def parse_reference(text: str) -> PrivilegeReference:
    aliases: dict[str, str] = {}
    groups: dict[str, list[str]] = {}
    scopes: dict[str, str] = {}

    for line in text.splitlines():
        if not line.strip():
            continue
        privilege, raw_aliases, level, parent = line.split("\t")[:4]

        cleaned = raw_aliases.strip("[]").replace("'", "")
        for alias in filter(None, cleaned.split(",")):
            if alias != privilege:
                aliases[alias] = privilege

        if parent != NULL:
            groups.setdefault(parent, []).append(privilege)
        if level != NULL:
            scopes[privilege] = level

    return PrivilegeReference(
        aliases=MappingProxyType(aliases),
        groups=MappingProxyType({k: tuple(v) for k, v in groups.items()}),
        scopes=MappingProxyType(scopes),
    )


@lru_cache(maxsize=None)
def load_reference() -> PrivilegeReference:
    text = resources.files(__package__).joinpath("grants.tsv").read_text(encoding="utf-8")
    return parse_reference(text)


def validate_grant(access_type: str, database: str | None, table: str | None,
                   column: str | None, reference: PrivilegeReference | None = None) -> None:
    """Reject grants ClickHouse would refuse or that cannot be read back reliably."""
    ref = reference or load_reference()

    canonical = ref.aliases.get(access_type)
    if canonical is not None:
        raise GrantValidationError(
            f'"{access_type}" is an alias for "{canonical}". Please use "{canonical}" instead'
        )

    # privileges newer than grants.tsv have no known scope and pass through
    scope = ref.scopes.get(access_type)
    if scope == GLOBAL and database is not None:
        raise GrantValidationError(f"'database' must be null when privilege is \"{access_type}\"")
    if scope in DATABASE_REQUIRED_SCOPES and database is None:
        raise GrantValidationError(f"'database' must be set when privilege is \"{access_type}\"")
    if scope in UNSUPPORTED_SCOPES:
        raise GrantValidationError(f'"{access_type}" privilege is currently unsupported')

    if column is not None and table is None:
        raise GrantValidationError("'table' must be set when 'column' is set")
    if table is not None and database is None:
        raise GrantValidationError("'database' must be set when 'table' is set")
