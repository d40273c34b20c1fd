"""
Error types raised by the aircon-local protocol, client and scanner
"""

from typing import Optional


class AirconError(Exception):
    """Base class for every error raised by this package"""


class TransportError(AirconError):
    """Network level failure: interface lookup, socket bind or HTTP connection"""


class NoInterfaceError(TransportError):
    """A named interface produced no usable IPv4 broadcast address"""

    def __init__(self, interface: str):
        super().__init__(f"no interface or no addresses: {interface}")
        self.interface = interface


class FrameError(AirconError):
    """Response body is not a single key=value record"""


class DecodeError(AirconError):
    """A wire value is outside the domain of its field"""

    def __init__(self, field: str, raw_value: str, reason: Optional[str] = None):
        message = f"unknown {field} value: {raw_value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.field = field
        self.raw_value = raw_value


class DeviceError(AirconError):
    """The unit answered but rejected the request (ret != OK)"""

    def __init__(self, ret: str):
        super().__init__(f"device returned error ret={ret}")
        self.ret = ret
