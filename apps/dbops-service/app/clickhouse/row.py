"""Typed access to one result row.

Transports disagree on value encoding: the HTTP transport returns every value
as text (with ``\\N`` for NULL) while the native transport returns Python
scalars. The getters accept both and fail with ``RowError`` on anything else.
"""

NULL_SENTINEL = "\\N"

_TRUE = ("1", "true")
_FALSE = ("0", "false")
_UINT64_MAX = 2**64 - 1


class RowError(LookupError):
    """Raised when a column is missing or holds a value of the wrong type."""


class Row:
    def __init__(self, data: dict | None = None):
        self._data = dict(data or {})

    def __repr__(self):
        return f"Row({self._data!r})"

    def __eq__(self, other):
        return isinstance(other, Row) and self._data == other._data

    def set(self, column: str, value) -> None:
        self._data[column] = value

    def columns(self) -> list[str]:
        return list(self._data)

    def _get(self, column: str):
        try:
            return self._data[column]
        except KeyError:
            raise RowError(f"field {column} was not found in row") from None

    def get_string(self, column: str) -> str:
        value = self._get(column)
        if not isinstance(value, str):
            raise RowError(f"field {column} is not a string ({type(value).__name__})")
        return value

    def get_nullable_string(self, column: str) -> str | None:
        value = self._get(column)
        if value is None or value == NULL_SENTINEL:
            return None
        if not isinstance(value, str):
            raise RowError(f"field {column} is not a nullable string ({type(value).__name__})")
        return value

    def get_bool(self, column: str) -> bool:
        value = self._get(column)
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return value == 1
        if isinstance(value, str):
            lowered = value.lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
        raise RowError(f"unable to get field {column} as bool ({value!r})")

    def get_uint64(self, column: str) -> int:
        value = self._get(column)
        if isinstance(value, bool):
            raise RowError(f"field {column} is not a uint64 (bool)")
        if isinstance(value, int) and 0 <= value <= _UINT64_MAX:
            return value
        if isinstance(value, str) and value.isascii() and value.isdigit() and int(value) <= _UINT64_MAX:
            return int(value)
        raise RowError(f"field {column} is not a uint64 ({value!r})")
