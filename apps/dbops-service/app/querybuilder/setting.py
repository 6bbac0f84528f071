from dataclasses import dataclass
from typing import Optional

from .base import QueryBuilderError
from .utils import backtick, quote

WRITABILITY_CONST = "CONST"
WRITABILITY_WRITABLE = "WRITABLE"
WRITABILITY_CHANGEABLE_IN_READONLY = "CHANGEABLE_IN_READONLY"

WRITABILITY_VALUES = (
    WRITABILITY_CONST,
    WRITABILITY_WRITABLE,
    WRITABILITY_CHANGEABLE_IN_READONLY,
)


@dataclass
class SettingDef:
    """One setting constraint inside SETTINGS PROFILE statements."""
    name: str
    value: Optional[str] = None
    min: Optional[str] = None
    max: Optional[str] = None
    writability: Optional[str] = None

    def sql(self) -> str:
        if not self.name:
            raise QueryBuilderError("setting name cannot be empty")
        if self.value is None and self.min is None and self.max is None:
            raise QueryBuilderError("either value, min or max must be set")
        if self.writability is not None and self.writability not in WRITABILITY_VALUES:
            raise QueryBuilderError(
                "invalid writability %r, must be one of %s"
                % (self.writability, ", ".join(WRITABILITY_VALUES))
            )

        tokens = [backtick(self.name)]
        if self.value is not None:
            tokens += ["=", quote(self.value)]
        if self.min is not None:
            tokens += ["MIN", quote(self.min)]
        if self.max is not None:
            tokens += ["MAX", quote(self.max)]
        if self.writability is not None:
            tokens.append(self.writability)
        return " ".join(tokens)
