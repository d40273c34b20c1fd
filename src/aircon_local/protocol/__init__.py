"""
Wire level codecs and framing for the HTTP control protocol
"""

from .codec import Fan, FanDir, Humidity, Mode, Name, Power, Temperature, WireEnum
from .framing import encode_fields, parse_response

__all__ = [
    'Fan', 'FanDir', 'Humidity', 'Mode', 'Name', 'Power', 'Temperature', 'WireEnum',
    'encode_fields', 'parse_response',
]
