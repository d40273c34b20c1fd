"""
Discovery module for finding units on the local network
"""

from .manager import NetworkScanner
from .models import DatagramReply, DiscoveryResult
from .network_discovery import REQUIRED_INTERFACE_FLAGS, compute_broadcast, get_broadcast_addresses

__all__ = ['NetworkScanner', 'DatagramReply', 'DiscoveryResult',
           'REQUIRED_INTERFACE_FLAGS', 'compute_broadcast', 'get_broadcast_addresses']
