"""
Typed parameter codecs for the HTTP control protocol

Enumerated parameters are Enums declared as (wire code, label) pairs; that
declaration is the only table, both encode and decode read from it.
"""

import re
from enum import Enum
from urllib.parse import quote, unquote

from ..errors import DecodeError

# Characters path-segment escaping leaves alone besides the unreserved set
_PATH_SAFE = "$&+:=@"
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
# ASCII only: no whitespace, digit separators or non-ASCII digits
_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


class WireEnum(Enum):
    """Enum whose value is the wire code and which carries a display label"""

    def __new__(cls, code: str, label: str):
        member = object.__new__(cls)
        member._value_ = code
        member.label = label
        return member

    def __str__(self) -> str:
        return self.label

    def encode(self) -> str:
        return self.value

    @classmethod
    def decode(cls, raw: str) -> "WireEnum":
        try:
            return cls(raw)
        except ValueError:
            raise DecodeError(cls.__name__, raw) from None


class Power(WireEnum):
    """Power status of the unit"""
    OFF = ("0", "Off")
    ON = ("1", "On")


class Mode(WireEnum):
    """Operating mode. Not every unit supports every mode."""
    AUTO = ("0", "Auto")
    AUTO_1 = ("1", "Auto")
    DEHUMIDIFY = ("2", "Dehumidify")
    COOL = ("3", "Cool")
    HEAT = ("4", "Heat")
    FAN = ("6", "Fan")
    AUTO_7 = ("7", "Auto")


class Fan(WireEnum):
    """Fan speed"""
    AUTO = ("A", "Auto")
    SILENT = ("B", "Silent")
    LEVEL_1 = ("3", "1")
    LEVEL_2 = ("4", "2")
    LEVEL_3 = ("5", "3")
    LEVEL_4 = ("6", "4")
    LEVEL_5 = ("7", "5")


class FanDir(WireEnum):
    """Louvre swing setting"""
    STOPPED = ("0", "Stopped")
    VERTICAL = ("1", "Vertical")
    HORIZONTAL = ("2", "Horizontal")
    BOTH = ("3", "Both")


class Temperature:
    """Degrees Celsius, one fractional digit on the wire"""

    @staticmethod
    def encode(value: float) -> str:
        return f"{float(value):.1f}"

    @staticmethod
    def decode(raw: str) -> float:
        if not _DECIMAL.fullmatch(raw):
            raise DecodeError("Temperature", raw)
        return float(raw)


class Humidity:
    """Relative humidity percentage; the unit sends "-" when it has no reading"""

    NOT_AVAILABLE = -1

    @staticmethod
    def encode(value: int) -> str:
        return str(int(value))

    @staticmethod
    def decode(raw: str) -> int:
        if raw == "-":
            return Humidity.NOT_AVAILABLE
        if not _INTEGER.fullmatch(raw):
            raise DecodeError("Humidity", raw)
        return int(raw)


class Name:
    """Path-escaped unit name"""

    @staticmethod
    def encode(value: str) -> str:
        return quote(value, safe=_PATH_SAFE)

    @staticmethod
    def decode(raw: str) -> str:
        if _BAD_ESCAPE.search(raw):
            raise DecodeError("Name", raw, "invalid escape sequence")
        try:
            return unquote(raw, errors="strict")
        except UnicodeDecodeError as e:
            raise DecodeError("Name", raw, str(e)) from None
