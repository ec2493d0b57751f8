"""
Command-Line Interface
======================

Small argparse front-end over DeviceFarmClient.

Examples:
  farmhand devices --query pixel --android
  farmhand pools
  farmhand ensure-pool nightly arn:aws:devicefarm:...:device:A arn:...:device:B
  farmhand upload build/app.apk --type ANDROID_APP --wait

The project ARN defaults to AWS_DEVICE_FARM_PROJECT_ARN from .env.
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from farmhand.client import DeviceFarmClient, create_client
from farmhand.config import get_settings
from farmhand.errors import FarmError
from farmhand.utils.logger import LogContext, get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="farmhand",
        description="AWS Device Farm devices, pools and uploads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1],
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    devices = sub.add_parser("devices", help="Search available devices")
    devices.add_argument("--query", default="", help="Case-insensitive name filter")
    devices.add_argument("--android", action="store_true", help="Only Android devices")
    devices.add_argument("--ios", action="store_true", help="Only iOS devices")

    pools = sub.add_parser("pools", help="List device pools")
    pools.add_argument("--project", help="Project ARN")

    ensure = sub.add_parser("ensure-pool", help="Create or update a pool of devices")
    ensure.add_argument("name", help="Pool name")
    ensure.add_argument("device_arns", nargs="+", help="Device ARNs")
    ensure.add_argument("--project", help="Project ARN")
    ensure.add_argument("--description", default="", help="Pool description")

    upload = sub.add_parser("upload", help="Upload an artifact")
    upload.add_argument("path", help="File to upload")
    upload.add_argument("--type", required=True, dest="upload_type", help="e.g. ANDROID_APP")
    upload.add_argument("--project", help="Project ARN")
    upload.add_argument("--wait", action="store_true", help="Wait for processing")
    upload.add_argument("--timeout-ms", type=int, help="Processing timeout")
    upload.add_argument("--interval-ms", type=int, help="Status polling interval")

    return parser


def _project_arn(args: argparse.Namespace) -> str:
    project = args.project or get_settings().device_farm.aws_device_farm_project_arn
    if not project:
        raise SystemExit("No project ARN: pass --project or set AWS_DEVICE_FARM_PROJECT_ARN")
    return project


async def run_command(client: DeviceFarmClient, args: argparse.Namespace) -> int:
    """Execute a parsed command and print its result."""
    if args.command == "devices":
        devices = await client.search_devices(args.query, args.android, args.ios)
        for d in devices:
            print(f"{d.name:<40} {d.platform:<8} {d.os:<8} {d.arn}")
        return 0

    project = _project_arn(args)
    with LogContext(project_arn=project):
        if args.command == "pools":
            for pool in await client.list_device_pools(project):
                print(f"{pool.name:<40} {pool.type:<8} {pool.arn}")
            return 0

        if args.command == "ensure-pool":
            pool = await client.ensure_device_pool(
                project, args.name, args.device_arns, args.description
            )
            print(pool.arn)
            return 0

        if args.command == "upload":
            upload = await client.upload_file(project, args.path, args.upload_type)
            print(upload.arn)
            if args.wait:
                polling = get_settings().polling
                await client.wait_for_uploads_to_succeed(
                    args.timeout_ms if args.timeout_ms is not None else polling.upload_timeout_ms,
                    args.interval_ms if args.interval_ms is not None else polling.upload_poll_interval_ms,
                    upload.arn,
                )
                print("SUCCEEDED")
            return 0

    raise ValueError(f"Unknown command: {args.command}")


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.debug else None)

    client = create_client()
    try:
        return await run_command(client, args)
    except (FarmError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        await client.close()


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
