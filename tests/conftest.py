"""Pytest configuration and fixtures for aircon-local tests."""

from typing import Dict, List, Optional

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from aircon_local.device import Device
from aircon_local.protocol import encode_fields


class FakeUnit:
    """In-process stand-in for a unit's HTTP control endpoints."""

    def __init__(self) -> None:
        self.control = {
            "ret": "OK",
            "pow": "1",
            "mode": "4",
            "adv": "",
            "stemp": "22.5",
            "shum": "45",
            "f_rate": "A",
            "f_dir": "3",
        }
        self.sensor = {"ret": "OK", "htemp": "21.0", "hhum": "-", "otemp": "9.5", "err": "0"}
        self.basic = {"ret": "OK", "type": "aircon", "name": "%4c%69%76%69%6e%67", "ver": "1_2_51"}
        self.set_ret = "OK"
        self.posts: List[Dict[str, str]] = []
        self.authorizations: List[Optional[str]] = []
        self.raw_bodies: Dict[str, str] = {}

        self.app = web.Application()
        self.app.router.add_get("/aircon/get_control_info", self._get_control)
        self.app.router.add_post("/aircon/set_control_info", self._set_control)
        self.app.router.add_get("/aircon/get_sensor_info", self._get_sensor)
        self.app.router.add_get("/common/basic_info", self._get_basic)

    def _reply(self, request: web.Request, values: Dict[str, str]) -> web.Response:
        self.authorizations.append(request.headers.get("Authorization"))
        body = self.raw_bodies.get(request.path, encode_fields(values))
        return web.Response(text=body)

    async def _get_control(self, request: web.Request) -> web.Response:
        return self._reply(request, self.control)

    async def _get_sensor(self, request: web.Request) -> web.Response:
        return self._reply(request, self.sensor)

    async def _get_basic(self, request: web.Request) -> web.Response:
        return self._reply(request, self.basic)

    async def _set_control(self, request: web.Request) -> web.Response:
        form = await request.post()
        self.posts.append(dict(form))
        if self.set_ret == "OK":
            for key, value in form.items():
                self.control[key] = value
        return self._reply(request, {"ret": self.set_ret})


@pytest.fixture
def fake_unit() -> FakeUnit:
    """Fixture providing a fake unit with default responses."""
    return FakeUnit()


@pytest.fixture
async def unit_server(fake_unit: FakeUnit):
    """Serve the fake unit on a loopback port."""
    server = TestServer(fake_unit.app)
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def device(unit_server: TestServer) -> Device:
    """A Device pointing at the fake unit."""
    return Device(address=f"{unit_server.host}:{unit_server.port}")
