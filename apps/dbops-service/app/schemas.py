from typing import List, Optional

from pydantic import BaseModel, Field

from .dbops.models import GrantPrivilege, GrantRole, Setting


class DatabaseCreate(BaseModel):
    name: str = Field(min_length=1)
    comment: str = ""
    cluster_name: Optional[str] = None


class RoleCreate(BaseModel):
    name: str = Field(min_length=1)
    cluster_name: Optional[str] = None


class RoleUpdate(BaseModel):
    name: str = Field(min_length=1)
    cluster_name: Optional[str] = None


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    password_sha256_hash: str = Field(min_length=1, repr=False)
    settings_profile: Optional[str] = None
    cluster_name: Optional[str] = None


class UserUpdate(BaseModel):
    name: str = Field(min_length=1)
    settings_profile: Optional[str] = None
    cluster_name: Optional[str] = None


class GrantRoleCreate(GrantRole):
    cluster_name: Optional[str] = None


class GrantPrivilegeCreate(GrantPrivilege):
    cluster_name: Optional[str] = None


class SettingsProfileCreate(BaseModel):
    name: str = Field(min_length=1)
    inherit_from: List[str] = []
    settings: List[Setting] = []
    cluster_name: Optional[str] = None


class SettingsProfileUpdate(BaseModel):
    name: str = Field(min_length=1)
    inherit_from: List[str] = []
    cluster_name: Optional[str] = None


class SettingCreate(Setting):
    cluster_name: Optional[str] = None


class AssociationRequest(BaseModel):
    role_id: Optional[str] = None
    user_id: Optional[str] = None
    cluster_name: Optional[str] = None


class AssociationOut(BaseModel):
    settings_profile_id: str
    role_id: Optional[str] = None
    user_id: Optional[str] = None
    associated: bool


class StorageOut(BaseModel):
    replicated: bool
