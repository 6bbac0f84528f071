"""Value records for every object the reconciliation operations manage.

They are plain pydantic models: nothing is cached, every read builds a fresh
record from the system tables.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..querybuilder.setting import WRITABILITY_VALUES


def _exactly_one_grantee(user_name: Optional[str], role_name: Optional[str]) -> None:
    if (user_name is None) == (role_name is None):
        raise ValueError("exactly one of grantee_user_name or grantee_role_name must be set")


class Database(BaseModel):
    uuid: str = ""
    name: str = Field(min_length=1)
    comment: str = ""


class Role(BaseModel):
    id: str = ""
    name: str = Field(min_length=1)
    settings_profiles: List[str] = []


class User(BaseModel):
    id: str = ""
    name: str = Field(min_length=1)
    # write-only, never read back from ClickHouse
    password_sha256_hash: str = Field(default="", exclude=True, repr=False)
    settings_profile: Optional[str] = None


class GrantRole(BaseModel):
    role_name: str = Field(min_length=1)
    grantee_user_name: Optional[str] = None
    grantee_role_name: Optional[str] = None
    admin_option: bool = False

    @model_validator(mode="after")
    def _check_grantee(self):
        _exactly_one_grantee(self.grantee_user_name, self.grantee_role_name)
        return self

    @property
    def grantee(self) -> str:
        return self.grantee_user_name or self.grantee_role_name


class GrantPrivilege(BaseModel):
    """A privilege grant. ``None`` database/table/column means "all"."""
    access_type: str = Field(min_length=1)
    database_name: Optional[str] = None
    table_name: Optional[str] = None
    column_name: Optional[str] = None
    grantee_user_name: Optional[str] = None
    grantee_role_name: Optional[str] = None
    grant_option: bool = False

    @model_validator(mode="after")
    def _check_grantee(self):
        _exactly_one_grantee(self.grantee_user_name, self.grantee_role_name)
        return self

    @property
    def grantee(self) -> str:
        return self.grantee_user_name or self.grantee_role_name


class Setting(BaseModel):
    name: str = Field(min_length=1)
    value: Optional[str] = None
    min: Optional[str] = None
    max: Optional[str] = None
    writability: Optional[str] = None

    @field_validator("writability")
    @classmethod
    def _check_writability(cls, v):
        if v is not None and v not in WRITABILITY_VALUES:
            raise ValueError(f"writability must be one of {', '.join(WRITABILITY_VALUES)}")
        return v

    @model_validator(mode="after")
    def _check_constraint(self):
        if self.value is None and self.min is None and self.max is None:
            raise ValueError("at least one of value, min or max must be set")
        return self


class SettingsProfile(BaseModel):
    id: str = ""
    name: str = Field(min_length=1)
    inherit_from: List[str] = []
    settings: List[Setting] = []


class UserDirectory(BaseModel):
    type: str
    precedence: int
