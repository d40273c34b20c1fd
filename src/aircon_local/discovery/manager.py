"""
Discovery scanner: UDP beacon polling across local broadcast domains
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional, Union

from ..config_loader import ScannerConfig
from ..const import DISCOVERY_PAYLOAD
from ..device.models import Device
from ..errors import TransportError
from .models import DatagramReply, DiscoveryResult
from .network_discovery import get_broadcast_addresses

logger = logging.getLogger(__name__)

class _DiscoveryProtocol(asyncio.DatagramProtocol):
    """Feeds every datagram (or socket error) on the shared socket into one queue.

    asyncio reports a failed ``sendto`` through ``error_received`` instead of
    raising, so errors seen while ``send`` runs are handed back to the sender
    and never reach the reply queue.
    """

    def __init__(self):
        self.replies: "asyncio.Queue[Union[DatagramReply, Exception]]" = asyncio.Queue()
        self.transport: Optional[asyncio.DatagramTransport] = None
        self._sending = False
        self._send_error: Optional[Exception] = None

    def connection_made(self, transport) -> None:
        self.transport = transport

    def send(self, data: bytes, addr) -> Optional[Exception]:
        """Send one datagram, returning the error it failed with"""
        self._sending = True
        self._send_error = None
        try:
            self.transport.sendto(data, addr)
        except OSError as e:
            return e
        finally:
            self._sending = False
        return self._send_error

    def datagram_received(self, data: bytes, addr) -> None:
        self.replies.put_nowait(DatagramReply(data, (addr[0], addr[1])))

    def error_received(self, exc: Exception) -> None:
        if self._sending:
            self._send_error = exc
            return
        self.replies.put_nowait(exc)


async def _next_reply(replies: asyncio.Queue, timeout: float):
    """Next queued item, or None once ``timeout`` passes without one.

    An item that arrives as the timeout fires stays queued for the next reader.
    """
    getter = asyncio.create_task(replies.get())
    try:
        done, _ = await asyncio.wait({getter}, timeout=timeout)
    finally:
        if not getter.done():
            getter.cancel()
    return getter.result() if done else None


class NetworkScanner:
    """Finds units by broadcasting the discovery beacon on every local subnet"""

    def __init__(self, config: Optional[ScannerConfig] = None):
        self.config = config or ScannerConfig()
        self.devices: Dict[str, Device] = {}  # address -> Device
        self.poll_count = self.config.poll_count

        if self.config.address:
            # A fixed unit replaces discovery entirely
            self.devices[self.config.address] = Device(address=self.config.address, token=self.config.token)
            self.poll_count = 0
            logger.info(f"Using configured unit at {self.config.address}, discovery disabled")

    async def discover(self) -> DiscoveryResult:
        """
        Run one polling cycle. Each broadcast address gets ``poll_count``
        beacons to DISCOVERY_PORT; replies are collected until ``poll_interval``
        passes without one. Returns once every poller has finished.
        """
        if self.poll_count < 1:
            return DiscoveryResult(devices=[])

        start_time = time.time()
        broadcasts = get_broadcast_addresses(self.config.interface)

        loop = asyncio.get_running_loop()
        try:
            transport, protocol = await loop.create_datagram_endpoint(
                _DiscoveryProtocol,
                local_addr=("0.0.0.0", self.config.local_port),
                allow_broadcast=True,
            )
        except OSError as e:
            raise TransportError(f"cannot bind UDP port {self.config.local_port}: {e}") from e

        found: "asyncio.Queue[Optional[str]]" = asyncio.Queue()
        new_devices: List[Device] = []
        collector = asyncio.create_task(self._collect(found, new_devices))
        reply_counts = []
        try:
            reply_counts = await asyncio.gather(
                *(self._poll(protocol, broadcast, found) for broadcast in broadcasts)
            )
        finally:
            found.put_nowait(None)
            await collector
            transport.close()

        duration = time.time() - start_time
        logger.info(f"[PASS] Discovery complete: {len(new_devices)} new units, "
                    f"{len(self.devices)} known, in {duration:.1f}s")
        return DiscoveryResult(
            devices=new_devices,
            broadcast_addresses=broadcasts,
            duration_seconds=duration,
            reply_count=sum(reply_counts)
        )

    async def _poll(self, protocol: _DiscoveryProtocol, broadcast: str, found: asyncio.Queue) -> int:
        """Send the beacon to one broadcast address and forward reply sources to ``found``"""
        logger.info(f"Start polling to: {broadcast}")
        reply_count = 0
        for _ in range(self.poll_count):
            error = protocol.send(DISCOVERY_PAYLOAD, (broadcast, self.config.discovery_port))
            if error is not None:
                logger.error(f"write to {broadcast}: {error}")
                continue

            # Listen until a read times out
            while True:
                reply = await _next_reply(protocol.replies, self.config.poll_interval)
                if reply is None:
                    break
                if isinstance(reply, Exception):
                    logger.error(f"read error: {reply}")
                    continue
                reply_count += 1
                logger.info(f"{len(reply.data)} bytes from {reply.ip}:{reply.addr[1]}: {reply.data!r}")
                found.put_nowait(reply.ip)
        return reply_count

    async def _collect(self, found: asyncio.Queue, new_devices: List[Device]) -> None:
        """Sole writer of the registry during a scan; the first reply from an address wins"""
        while True:
            ip = await found.get()
            if ip is None:
                return
            if ip in self.devices:
                continue
            device = Device(address=ip)
            self.devices[ip] = device
            new_devices.append(device)
            logger.info(f"[OK] Found unit at {ip}")
