"""
Device data structures: the unit itself and its two parameter groups
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ..protocol.codec import Fan, FanDir, Humidity, Mode, Power, Temperature

# wire key -> (attribute, codec)
CONTROL_FIELDS = {
    'pow': ('power', Power),
    'mode': ('mode', Mode),
    'f_rate': ('fan', Fan),
    'f_dir': ('fan_dir', FanDir),
    'stemp': ('temperature', Temperature),
    'shum': ('humidity', Humidity),
}

SENSOR_FIELDS = {
    'htemp': ('home_temperature', Temperature),
    'otemp': ('outside_temperature', Temperature),
    'hhum': ('humidity', Humidity),
}


def _populate(target, fields: Dict, values: Dict[str, str]) -> None:
    # Stops at the first bad value; earlier fields stay assigned
    for key, raw in values.items():
        if key not in fields:
            continue
        attr, codec = fields[key]
        setattr(target, attr, codec.decode(raw))


@dataclass
class ControlInfo:
    """Settable control status of the unit"""
    power: Power = Power.OFF
    mode: Mode = Mode.AUTO
    fan: Fan = Fan.AUTO
    fan_dir: FanDir = FanDir.STOPPED
    temperature: float = 0.0  # set point, Celsius
    humidity: int = 0  # set humidity, -1 when the unit reports none

    def populate(self, values: Dict[str, str]) -> None:
        """Decode a framed get_control_info response into this instance"""
        _populate(self, CONTROL_FIELDS, values)

    def url_values(self) -> Dict[str, str]:
        """Form fields for set_control_info"""
        return {
            key: codec.encode(getattr(self, attr))
            for key, (attr, codec) in CONTROL_FIELDS.items()
        }

    def __str__(self) -> str:
        return (
            f"pow: {self.power}\n"
            f"mode: {self.mode}\n"
            f"stemp: {Temperature.encode(self.temperature)}\n"
            f"shum: {Humidity.encode(self.humidity)}\n"
            f"f_rate: {self.fan}\n"
            f"f_dir: {self.fan_dir}"
        )


@dataclass
class SensorInfo:
    """Current sensor readings. Read only, never sent to the unit."""
    home_temperature: float = 0.0
    outside_temperature: float = 0.0
    humidity: int = 0

    def populate(self, values: Dict[str, str]) -> None:
        _populate(self, SENSOR_FIELDS, values)

    def __str__(self) -> str:
        return (
            f"in_temp: {Temperature.encode(self.home_temperature)}\n"
            f"in_humidity: {Humidity.encode(self.humidity)}\n"
            f"out_temp: {Temperature.encode(self.outside_temperature)}"
        )


@dataclass
class Device:
    """A unit on the network, identified by its IPv4 address"""
    address: str
    name: str = ""
    token: Optional[str] = None  # bearer token, sent when set
    control: Optional[ControlInfo] = None
    sensor: Optional[SensorInfo] = None

    @property
    def base_url(self) -> str:
        return f"http://{self.address}"

    def __str__(self) -> str:
        control = str(self.control) if self.control else "<unknown>"
        sensor = str(self.sensor) if self.sensor else "<unknown>"
        return f"name: {self.name}\n{control}\n{sensor}\n"
