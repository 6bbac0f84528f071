from .client import ClickHouseClient, ClickHouseError, mask_sql
from .row import Row, RowError
