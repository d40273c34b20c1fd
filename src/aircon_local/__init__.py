"""
aircon-local: discover and control climate units over their local UDP/HTTP protocol
"""

from .config_loader import ScannerConfig, load_config, setup_logging
from .device import ControlInfo, Device, DeviceClient, SensorInfo
from .discovery import DiscoveryResult, NetworkScanner
from .errors import (
    AirconError,
    DecodeError,
    DeviceError,
    FrameError,
    NoInterfaceError,
    TransportError,
)
from .protocol import Fan, FanDir, Humidity, Mode, Name, Power, Temperature

__version__ = "0.1.0"

__all__ = [
    'ScannerConfig', 'load_config', 'setup_logging',
    'ControlInfo', 'Device', 'DeviceClient', 'SensorInfo',
    'DiscoveryResult', 'NetworkScanner',
    'AirconError', 'DecodeError', 'DeviceError', 'FrameError', 'NoInterfaceError', 'TransportError',
    'Fan', 'FanDir', 'Humidity', 'Mode', 'Name', 'Power', 'Temperature',
]
