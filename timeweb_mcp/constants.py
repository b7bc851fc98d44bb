"""Timeweb Cloud API constants shared by the client, schemas and formatters."""

API_BASE_URL = "https://api.timeweb.cloud"
API_TOKEN_URL = "https://timeweb.cloud/my/api-keys"

SERVER_NAME = "timeweb-mcp-server"
SERVER_VERSION = "1.0.0"

REQUEST_TIMEOUT = 30.0

# Rendered responses longer than this are cut with a trailing note
CHARACTER_LIMIT = 25000

DEFAULT_LIMIT = 50
MAX_LIMIT = 100

DEFAULT_LOCALE = "ru_RU"
DEFAULT_CURRENCY = "RUB"

LOCATIONS = ("ru-1", "ru-2", "ru-3", "pl-1", "kz-1", "nl-1")
