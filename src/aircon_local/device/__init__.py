"""
Device model and HTTP control client
"""

from .client import DeviceClient
from .models import ControlInfo, Device, SensorInfo

__all__ = ['DeviceClient', 'ControlInfo', 'Device', 'SensorInfo']
