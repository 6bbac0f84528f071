"""Quoting helpers for ClickHouse identifiers and string literals.

Backslashes are always escaped first, then the delimiter, so the output can
never close the quoted token early.
"""


def backslash(value: str) -> str:
    return value.replace("\\", "\\\\")


def backtick(name: str) -> str:
    """Quote an identifier: te`st -> `te\\`st`."""
    return "`" + backslash(name).replace("`", "\\`") + "`"


def quote(value: str) -> str:
    """Quote a string literal: it's -> 'it\\'s'."""
    return "'" + backslash(value).replace("'", "\\'") + "'"


def backtick_all(names: list[str]) -> list[str]:
    return [backtick(n) for n in names]


def quote_all(values: list[str]) -> list[str]:
    return [quote(v) for v in values]


def qualified_name(name: str) -> str:
    """Quote a possibly dotted name part by part (system.users -> `system`.`users`)."""
    return ".".join(backtick(part) for part in name.split("."))
