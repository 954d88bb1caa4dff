"""
Application-wide constants.

This module centralizes magic strings and numbers used throughout the application.
"""
from enum import Enum


class CarSortKey(str, Enum):
    """Columns the car list can be sorted by (values match the wire field names)."""

    REGISTRATION = 'registration'
    OWNER = 'owner'
    BRAND = 'brand'
    MODEL = 'model'
    RELEASE_DATE = 'releaseDate'

    @classmethod
    def parse(cls, value: str | None) -> 'CarSortKey':
        """Resolve a query value, falling back to registration for unknown keys"""
        if not value:
            return cls.REGISTRATION
        for key in cls:
            if key.value.lower() == value.lower():
                return key
        return cls.REGISTRATION


class SQLiteLimits:
    """Value ranges the SQLite columns can store"""

    INT_MIN = -2 ** 63
    INT_MAX = 2 ** 63 - 1
    # Byte arrays may hold signed or unsigned byte values
    BYTE_MIN = -128
    BYTE_MAX = 255


class ServerDefaults:
    """Defaults used when the environment does not configure the server"""

    ADDRESS = "localhost"
    PORT = 8080
    APP_NAME = "Hostocars"
    DATA_DIR_NAME = ".hostocars"
    DB_FILENAME = "hostocars.db"
    LOG_DIR_NAME = "logs"
    LOG_FILENAME = "backend.log"


class LogConfig:
    """Logging configuration"""

    TRACE = 5
    FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5
    UNSERIALIZABLE_PLACEHOLDER = "Unable to write as JSON"


class TrayConfig:
    """System tray labels"""

    OPEN_LABEL = "Ouvrir"
    QUIT_LABEL = "Quitter"
    ICON_SIZE = 64
    ICON_BACKGROUND = (25, 118, 210)
    ICON_FOREGROUND = (255, 255, 255)


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    CREATED = 201
    NO_CONTENT = 204

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
