"""
HTTP client for the unit's control endpoints
"""

import asyncio
import logging
from typing import Dict, Optional

import aiohttp

from ..const import (
    DEFAULT_REQUEST_TIMEOUT,
    RETURN_OK,
    URI_GET_BASIC_INFO,
    URI_GET_CONTROL_INFO,
    URI_GET_SENSOR_INFO,
    URI_SET_CONTROL_INFO,
)
from ..errors import DeviceError, TransportError
from ..http_helper import auth_headers, create_device_session
from ..protocol.codec import Name
from ..protocol.framing import encode_fields, parse_response
from .models import ControlInfo, Device, SensorInfo

logger = logging.getLogger(__name__)

class DeviceClient:
    """Reads and writes ControlInfo/SensorInfo on a unit.

    Calls against one Device are not reentrant: fetch, mutate ``control``,
    then push is a read-then-write sequence the caller must not race.
    """

    def __init__(self, request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
                 session: Optional[aiohttp.ClientSession] = None):
        self.request_timeout = request_timeout
        self._own_session = session is None
        self.session = session

    async def __aenter__(self) -> "DeviceClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self):
        if self._own_session and self.session is not None and not self.session.closed:
            await self.session.close()
        if self._own_session:
            self.session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = create_device_session(self.request_timeout)
            self._own_session = True
        return self.session

    # ================== RAW REQUESTS ==================

    async def get(self, device: Device, path: str) -> Dict[str, str]:
        """GET a path on the unit and return the framed key/value mapping"""
        url = f"{device.base_url}{path}"
        logger.debug(f"GET {url}")
        body = await self._request("GET", url, device)
        return parse_response(body)

    async def set(self, device: Device, path: str, fields: Dict[str, str]) -> Dict[str, str]:
        """POST form fields to the unit; the reply must carry ret=OK"""
        url = f"{device.base_url}{path}"
        logger.debug(f"POST {url}: {encode_fields(fields)}")
        body = await self._request("POST", url, device, data=fields)
        values = parse_response(body)
        ret = values.get("ret", "")
        if ret != RETURN_OK:
            raise DeviceError(ret)
        return values

    async def _request(self, method: str, url: str, device: Device, data: Optional[Dict[str, str]] = None) -> bytes:
        session = self._get_session()
        try:
            async with session.request(method, url, data=data, headers=auth_headers(device.token)) as response:
                if response.status >= 400:
                    raise TransportError(f"HTTP {response.status} for {url}")
                return await response.read()
        except aiohttp.ClientError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise TransportError(f"{method} {url} timed out after {self.request_timeout}s") from e

    # ================== PARAMETER GROUPS ==================

    async def fetch_control_info(self, device: Device) -> ControlInfo:
        """Fetch the current control settings into a fresh device.control.

        A failed request leaves ``device.control`` untouched; a decode error
        leaves the fresh instance partially populated.
        """
        values = await self.get(device, URI_GET_CONTROL_INFO)
        device.control = ControlInfo()
        device.control.populate(values)
        return device.control

    async def fetch_sensor_info(self, device: Device) -> SensorInfo:
        """Fetch the current sensor readings into a fresh device.sensor"""
        values = await self.get(device, URI_GET_SENSOR_INFO)
        device.sensor = SensorInfo()
        device.sensor.populate(values)
        return device.sensor

    async def fetch_basic_info(self, device: Device) -> Dict[str, str]:
        """Fetch /common/basic_info and pick up the unit's name"""
        values = await self.get(device, URI_GET_BASIC_INFO)
        if "name" in values:
            device.name = Name.decode(values["name"])
        return values

    async def push_control_info(self, device: Device) -> None:
        """Send the device's full ControlInfo to the unit"""
        if device.control is None:
            raise ValueError(f"{device.address}: no control info to push, fetch it first")
        await self.set(device, URI_SET_CONTROL_INFO, device.control.url_values())
        logger.info(f"[SET] Control info pushed to {device.address}")
