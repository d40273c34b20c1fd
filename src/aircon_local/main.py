"""
aircon-local command line tool - query and control units on the local network
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import yaml

from .config_loader import ScannerConfig, get_sample_config, load_config, setup_logging
from .device import Device, DeviceClient
from .discovery import NetworkScanner
from .errors import AirconError
from .protocol.codec import Fan, FanDir, Mode, Power

logger = logging.getLogger(__name__)

FAN_SPEEDS = {
    "A": Fan.AUTO,
    "B": Fan.SILENT,
    **{fan.label: fan for fan in Fan if fan.label.isdigit()},
}

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aircon-local", description="Query and control climate units")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--interface", help="Interface to scan on")
    parser.add_argument("--address", help="Use unit at specific address")
    parser.add_argument("--token", help="Bearer token for the unit at --address")
    parser.add_argument("--poll-count", type=int, help="Beacons per broadcast address")
    parser.add_argument("--poll-interval", type=float, help="Seconds to wait for replies")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    power = parser.add_mutually_exclusive_group()
    power.add_argument("--on", action="store_true", help="Turn unit on")
    power.add_argument("--off", action="store_true", help="Turn unit off")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--heat", action="store_true", help="Set to heating mode")
    mode.add_argument("--cool", action="store_true", help="Set to cooling mode")
    mode.add_argument("--fan", action="store_true", help="Set to fan mode")
    mode.add_argument("--dry", action="store_true", help="Set to dehumidify mode")
    mode.add_argument("--auto", action="store_true", help="Set to auto mode")

    parser.add_argument("--speed", choices=list(FAN_SPEEDS), help="Fan speed")
    parser.add_argument("--vertical", action="store_true", help="Sweep louvres vertically")
    parser.add_argument("--horizontal", action="store_true", help="Sweep louvres horizontally")
    parser.add_argument("--temp", type=float, default=22.0, help="Temperature to set to")
    return parser

def build_config(args: argparse.Namespace) -> dict:
    """Merge the optional YAML file with command line overrides"""
    config = load_config(args.config) if args.config else get_sample_config()
    network = config['network']
    overrides = {
        'interface': args.interface,
        'address': args.address,
        'token': args.token,
        'poll_count': args.poll_count,
        'poll_interval': args.poll_interval,
    }
    for key, value in overrides.items():
        if value is not None:
            network[key] = value
    if args.verbose:
        config['logging']['level'] = 'DEBUG'
    return config

def fan_direction(vertical: bool, horizontal: bool) -> FanDir:
    """Louvre setting for the sweep flags; no flag stops the louvres"""
    if vertical and horizontal:
        return FanDir.BOTH
    if vertical:
        return FanDir.VERTICAL
    if horizontal:
        return FanDir.HORIZONTAL
    return FanDir.STOPPED

def apply_settings(device: Device, args: argparse.Namespace) -> None:
    control = device.control
    control.power = Power.ON if args.on else Power.OFF
    if args.heat:
        control.mode = Mode.HEAT
    elif args.cool:
        control.mode = Mode.COOL
    elif args.fan:
        control.mode = Mode.FAN
    elif args.dry:
        control.mode = Mode.DEHUMIDIFY
    elif args.auto:
        control.mode = Mode.AUTO
    if args.speed:
        control.fan = FAN_SPEEDS[args.speed]
    control.fan_dir = fan_direction(args.vertical, args.horizontal)
    if args.temp > 0:
        control.temperature = args.temp

async def refresh(client: DeviceClient, device: Device) -> None:
    await client.fetch_control_info(device)
    await client.fetch_sensor_info(device)

async def handle_device(client: DeviceClient, device: Device, args: argparse.Namespace) -> None:
    await client.fetch_basic_info(device)
    await refresh(client, device)
    print(f"Current {device.address}:\n{device}\n")
    if not (args.on or args.off):
        return

    apply_settings(device, args)
    print(f"Setting to new values:\n{device}\n")
    await client.push_control_info(device)
    await refresh(client, device)
    print(f"New values {device.address}:\n{device}\n")

async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    try:
        config = build_config(args)
        setup_logging(config)
        scanner = NetworkScanner(ScannerConfig.from_dict(config['network']))
        await scanner.discover()
    except (AirconError, OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Discovery failed: {e}")
        return 1

    print("Devices:")
    async with DeviceClient(scanner.config.request_timeout) as client:
        for address, device in scanner.devices.items():
            try:
                await handle_device(client, device, args)
            except AirconError as e:
                logger.error(f"{address}: {e}")
                continue

    return 0

def run() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nStopped by user")
        sys.exit(0)

if __name__ == "__main__":
    run()
