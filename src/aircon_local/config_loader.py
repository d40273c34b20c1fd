"""
Configuration loader for aircon-local
Loads and validates configuration from YAML files and builds the scanner configuration
"""

import yaml
import ipaddress
import logging
from dataclasses import dataclass, fields
from typing import Dict, Any, Optional
from pathlib import Path
from datetime import datetime
import pytz

from .const import DEFAULT_REQUEST_TIMEOUT, DISCOVERY_LOCAL_PORT, DISCOVERY_PORT

logger = logging.getLogger(__name__)

@dataclass
class ScannerConfig:
    """
    Discovery and client settings.

    interface: only scan this interface (default: every qualifying one)
    address: skip discovery and use the unit at this IPv4 address
    token: bearer token for the unit given by ``address``
    poll_interval: seconds of silence that end one listening phase
    poll_count: number of beacons sent per broadcast address; 0 disables discovery
    local_port: UDP port the scanner binds
    discovery_port: UDP port units listen on for the beacon
    request_timeout: total timeout for one HTTP request, seconds
    """
    interface: Optional[str] = None
    address: Optional[str] = None
    token: Optional[str] = None
    poll_interval: float = 1.0
    poll_count: int = 1
    local_port: int = DISCOVERY_LOCAL_PORT
    discovery_port: int = DISCOVERY_PORT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self):
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.poll_count < 0:
            raise ValueError(f"poll_count must not be negative, got {self.poll_count}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")
        for name in ('local_port', 'discovery_port'):
            port = getattr(self, name)
            if not 0 <= port <= 65535:
                raise ValueError(f"{name} out of range: {port}")
        if self.address:
            try:
                ipaddress.IPv4Address(self.address)
            except ValueError:
                raise ValueError(f"address must be an IPv4 literal, got {self.address!r}") from None
        if self.token and not self.address:
            logger.warning("token is only used together with address - ignoring it for discovered units")

    @classmethod
    def from_dict(cls, section: Dict[str, Any]) -> "ScannerConfig":
        """Build from the ``network`` section of the YAML configuration"""
        known = {f.name for f in fields(cls)}
        unknown = set(section) - known
        if unknown:
            raise ValueError(f"Unknown network settings: {', '.join(sorted(unknown))}")
        return cls(**{key: value for key, value in section.items() if value is not None})

def load_config(config_path: str = "config/config.yaml") -> Dict[str, Any]:
    """
    Load configuration from YAML file with validation
    """
    try:
        config_file = Path(config_path)
        if not config_file.exists():
            logger.error(f"Configuration file not found: {config_path}")
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r') as f:
            config = yaml.safe_load(f) or {}

        _validate_config(config)

        config = _apply_defaults(config)

        logger.info(f"Configuration loaded from {config_path}")
        return config

    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise

def _validate_config(config: Dict) -> None:
    """Validate configuration section types and the network settings"""
    if not isinstance(config, dict):
        raise ValueError("Configuration must be a mapping")

    for section in ('network', 'logging'):
        if section in config and not isinstance(config[section], dict):
            raise ValueError(f"Configuration section {section} must be a mapping")

    # Builds and discards a ScannerConfig so bad values fail at load time
    ScannerConfig.from_dict(config.get('network') or {})

    level = (config.get('logging') or {}).get('level')
    if level is not None and not isinstance(logging.getLevelName(str(level).upper()), int):
        raise ValueError(f"Unknown logging level: {level}")

def _apply_defaults(config: Dict) -> Dict:
    """Apply default values to configuration"""

    # Network defaults
    if not config.get('network'):
        config['network'] = {}
    network_defaults = {
        'poll_interval': 1.0,
        'poll_count': 1,
        'local_port': DISCOVERY_LOCAL_PORT,
        'discovery_port': DISCOVERY_PORT,
        'request_timeout': DEFAULT_REQUEST_TIMEOUT
    }
    for key, default_value in network_defaults.items():
        if key not in config['network']:
            config['network'][key] = default_value

    # Logging defaults
    if not config.get('logging'):
        config['logging'] = {}
    logging_defaults = {
        'level': 'INFO',
        'file': None,
        'console_output': True,
        'timezone': 'UTC'
    }
    for key, default_value in logging_defaults.items():
        if key not in config['logging']:
            config['logging'][key] = default_value

    return config


class TimezoneFormatter(logging.Formatter):
    """Formatter that renders timestamps in a configured timezone"""

    def __init__(self, fmt=None, tz_name: str = 'UTC'):
        super().__init__(fmt)
        self.tz = pytz.timezone(tz_name)

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=self.tz)
        if datefmt:
            return dt.strftime(datefmt)
        else:
            # Default format: YYYY-MM-DD HH:MM:SS TZ
            return dt.strftime('%Y-%m-%d %H:%M:%S %Z')

def setup_logging(config: Dict) -> None:
    """Setup logging based on configuration"""
    log_config = config.get('logging', {})
    level = log_config.get('level', 'INFO')
    tz_name = log_config.get('timezone', 'UTC')

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = TimezoneFormatter(log_format, tz_name)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if log_config.get('console_output', True):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    log_file = log_config.get('file')
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logger.debug(f"Logging configured: level={level}, tz={tz_name}, console={log_config.get('console_output', True)}, file={log_file}")

def get_sample_config() -> Dict:
    """Return a sample configuration for reference"""
    return {
        "network": {
            "interface": None,           # e.g. "eth0"; None scans every qualifying interface
            "address": None,             # e.g. "192.168.1.50"; skips discovery
            "token": None,               # bearer token for the unit at address
            "poll_interval": 1.0,
            "poll_count": 1,
            "local_port": DISCOVERY_LOCAL_PORT,
            "discovery_port": DISCOVERY_PORT,
            "request_timeout": DEFAULT_REQUEST_TIMEOUT
        },
        "logging": {
            "level": "INFO",
            "file": None,
            "console_output": True,
            "timezone": "UTC"
        }
    }
