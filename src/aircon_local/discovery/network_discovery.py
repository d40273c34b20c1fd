"""
Local interface enumeration and broadcast address computation
"""

import ipaddress
import logging
import socket
from typing import Dict, List, Optional

import psutil

from ..errors import NoInterfaceError, TransportError

logger = logging.getLogger(__name__)

# An interface takes part in discovery only when it carries all of these flags
REQUIRED_INTERFACE_FLAGS = frozenset({"up", "broadcast", "multicast"})


def compute_broadcast(address: str, netmask: Optional[str]) -> Optional[str]:
    """
    Broadcast address of the subnet ``address/netmask``, i.e. network | ~mask.
    Returns None for anything that is not an IPv4 CIDR.
    """
    if not netmask:
        return None
    try:
        iface = ipaddress.ip_interface(f"{address}/{netmask}")
    except ValueError:
        return None
    if iface.version != 4:
        return None
    return str(iface.network.broadcast_address)


def _interface_flags(stats) -> frozenset:
    flags = {flag for flag in getattr(stats, "flags", "").split(",") if flag}
    if stats.isup:
        flags.add("up")
    return frozenset(flags)


def qualifying_interfaces(interface: Optional[str] = None) -> Dict[str, list]:
    """Interfaces (name -> psutil addresses) that can carry a broadcast beacon"""
    try:
        stats = psutil.net_if_stats()
        addrs = psutil.net_if_addrs()
    except OSError as e:
        raise TransportError(f"cannot enumerate network interfaces: {e}") from e

    selected = {}
    for name, iface_addrs in addrs.items():
        if interface and name != interface:
            continue
        iface_stats = stats.get(name)
        if iface_stats is None or not REQUIRED_INTERFACE_FLAGS <= _interface_flags(iface_stats):
            continue
        selected[name] = iface_addrs
    return selected


def get_broadcast_addresses(interface: Optional[str] = None) -> List[str]:
    """
    Broadcast addresses of every qualifying interface, optionally only the
    named one. Raises NoInterfaceError if a named interface yields none.
    """
    broadcasts = []
    for name, iface_addrs in qualifying_interfaces(interface).items():
        for addr in iface_addrs:
            if addr.family != socket.AF_INET:
                logger.info(f"{name}: {addr.address}: Skipping non-v4 address")
                continue
            broadcast = compute_broadcast(addr.address, addr.netmask)
            if broadcast is None:
                logger.info(f"{name}: Can't parse {addr.address}/{addr.netmask}, skipping.")
                continue
            if broadcast not in broadcasts:
                broadcasts.append(broadcast)

    if not broadcasts and interface:
        raise NoInterfaceError(interface)
    logger.info(f"Broadcast addresses: {broadcasts}")
    return broadcasts
