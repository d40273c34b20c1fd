"""
Discovery data structures and models
"""

from typing import List, Tuple
from dataclasses import dataclass, field

from ..device.models import Device

@dataclass
class DatagramReply:
    """A datagram received on the shared discovery socket"""
    data: bytes
    addr: Tuple[str, int]

    @property
    def ip(self) -> str:
        return self.addr[0]

@dataclass
class DiscoveryResult:
    """Results from one discovery scan"""
    devices: List[Device]  # registry entries added by this scan
    broadcast_addresses: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0
    reply_count: int = 0
