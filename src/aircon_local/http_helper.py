# HTTP helper for unit connections
# Units only speak plain HTTP on their bare IPv4 address

import aiohttp
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

def create_device_session(timeout_seconds: float = 5) -> aiohttp.ClientSession:
    """
    Create an aiohttp session for local unit connections (always HTTP)
    The wifi modules handle very few sockets, so connections are closed after each request
    """
    connector = aiohttp.TCPConnector(
        limit_per_host=2,           # Max 2 connections per unit
        ssl=False,                  # Units use HTTP only
        force_close=True            # Force connection cleanup
    )

    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(total=timeout_seconds)
    )

def auth_headers(token: Optional[str]) -> Dict[str, str]:
    """Bearer header for units configured with a token"""
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}
