from .base import NoChangeError, QueryBuilder, QueryBuilderError
from .database import CreateDatabase
from .drop import drop_database, drop_role, drop_settings_profile, drop_user
from .field import Field
from .grant import GrantPrivilege, GrantRole, RevokePrivilege, RevokeRole
from .role import AlterRole, CreateRole
from .select import OrderDirection, Select
from .setting import WRITABILITY_VALUES, SettingDef
from .settingsprofile import AlterSettingsProfile, CreateSettingsProfile
from .user import AlterUser, CreateUser, Identification
from .utils import backslash, backtick, backtick_all, quote
from .where import AndWhere, IsNull, Where, WhereDiffers, WhereEquals
