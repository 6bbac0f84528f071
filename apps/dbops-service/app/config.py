import os

CLICKHOUSE_PROTOCOL = os.getenv("CLICKHOUSE_PROTOCOL", "http")
CLICKHOUSE_HOST = os.getenv("CLICKHOUSE_HOST", "localhost")
CLICKHOUSE_PORT = int(os.getenv("CLICKHOUSE_PORT", "8123"))
CLICKHOUSE_USERNAME = os.getenv("CLICKHOUSE_USERNAME", "default")
CLICKHOUSE_PASSWORD = os.getenv("CLICKHOUSE_PASSWORD", "")
CLICKHOUSE_PASSWORD_ENCRYPTED = os.getenv("CLICKHOUSE_PASSWORD_ENCRYPTED")
CLICKHOUSE_DATABASE = os.getenv("CLICKHOUSE_DATABASE", "default")
CLICKHOUSE_TIMEOUT = float(os.getenv("CLICKHOUSE_TIMEOUT", "30"))
CLICKHOUSE_TLS_VERIFY = os.getenv("CLICKHOUSE_TLS_VERIFY", "true").lower() in ("1", "true", "yes")

ENCRYPTION_KEY = os.getenv("ENCRYPTION_KEY", "0123456789abcdef0123456789abcdef")
INTERNAL_API_KEY = os.getenv("INTERNAL_API_KEY", "change-me-internal-key")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
