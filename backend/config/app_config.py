"""
Application Configuration

Reads the process-wide settings from environment variables once, at startup.

Includes:
- Server bind address and port (also used to build the tray URL)
- Application display name
- Data directory for the SQLite database and log files
- Log level and tray toggle
"""
import os
import logging
from dataclasses import dataclass
from pathlib import Path

from constants import ServerDefaults, LogConfig
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_LOG_LEVELS = {
    'TRACE': LogConfig.TRACE,
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}


@dataclass(frozen=True)
class AppConfig:
    """Immutable snapshot of the startup configuration"""

    server_address: str
    server_port: int
    app_name: str
    data_dir: Path
    log_level: int
    tray_enabled: bool

    @property
    def base_url(self) -> str:
        """URL of the embedded web UI"""
        return f"http://{self.server_address}:{self.server_port}"

    @property
    def db_path(self) -> Path:
        return self.data_dir / ServerDefaults.DB_FILENAME

    @property
    def log_dir(self) -> Path:
        return self.data_dir / ServerDefaults.LOG_DIR_NAME


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"Server port must be a number, got '{raw}'", ['HOSTOCARS_SERVER_PORT'])
    if not (1 <= port <= 65535):
        raise ConfigurationError(f"Server port must be between 1 and 65535, got {port}", ['HOSTOCARS_SERVER_PORT'])
    return port


def _parse_log_level(raw: str) -> int:
    level = _LOG_LEVELS.get(raw.strip().upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level '{raw}'", ['HOSTOCARS_LOG_LEVEL'])
    return level


def load_config(environ: dict | None = None) -> AppConfig:
    """
    Build the configuration from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        AppConfig instance

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    env = os.environ if environ is None else environ

    data_dir = env.get('HOSTOCARS_DATA_DIR')
    data_path = Path(data_dir).expanduser() if data_dir else Path.home() / ServerDefaults.DATA_DIR_NAME

    return AppConfig(
        server_address=env.get('HOSTOCARS_SERVER_ADDRESS', ServerDefaults.ADDRESS),
        server_port=_parse_port(env.get('HOSTOCARS_SERVER_PORT', str(ServerDefaults.PORT))),
        app_name=env.get('HOSTOCARS_APP_NAME', ServerDefaults.APP_NAME),
        data_dir=data_path,
        log_level=_parse_log_level(env.get('HOSTOCARS_LOG_LEVEL', 'INFO')),
        tray_enabled=env.get('HOSTOCARS_TRAY_ENABLED', 'true').lower() in _TRUE_VALUES,
    )


# Global configuration, read once at import
APP_CONFIG = load_config()
