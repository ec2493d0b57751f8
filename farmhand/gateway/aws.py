"""
AWS Device Farm Gateway
=======================

Implementation of RemoteGateway on top of the boto3 ``devicefarm`` client.

This gateway handles:
- Device listing (all pages)
- Device pool listing, creation and rule updates
- Upload creation and status lookup

Blocking boto3 calls run in a worker thread so the event loop is never
blocked. Every botocore failure is re-raised as ``TransportError``.

Prerequisites:
    - AWS account with Device Farm access
    - IAM credentials with devicefarm:* permissions
    - boto3 installed

Usage:
    from farmhand.gateway.aws import AWSDeviceFarmGateway

    gateway = AWSDeviceFarmGateway()
    devices = await gateway.list_devices()
"""

import asyncio
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from farmhand.config import DeviceFarmSettings, get_settings
from farmhand.devices.models import Device, DevicePool, Rule, Upload
from farmhand.errors import TransportError
from farmhand.gateway.base import RemoteGateway
from farmhand.utils.logger import get_logger

logger = get_logger(__name__)


class AWSDeviceFarmGateway(RemoteGateway):
    """
    Device Farm API access through boto3.

    Args:
        settings: Connection settings. Defaults to the cached app settings.
        client: Pre-built boto3 client (mostly for tests). Created lazily
            from ``settings`` when omitted.
    """

    def __init__(
        self,
        settings: Optional[DeviceFarmSettings] = None,
        client: Any = None,
    ) -> None:
        self.settings = settings or get_settings().device_farm
        self._df_client: Any = client

    # ── boto3 helpers ─────────────────────────────────────────────

    def _get_boto_client(self) -> Any:
        """Get or create boto3 Device Farm client."""
        if self._df_client is None:
            import boto3

            kwargs: dict[str, Any] = {"region_name": self.settings.aws_region}

            # Explicit credentials are optional; otherwise boto3 uses the
            # default chain (env vars, ~/.aws/credentials, IAM role)
            if self.settings.has_explicit_credentials():
                kwargs["aws_access_key_id"] = self.settings.aws_access_key_id
                kwargs["aws_secret_access_key"] = self.settings.aws_secret_access_key

            self._df_client = boto3.client("devicefarm", **kwargs)
            logger.debug("Created boto3 devicefarm client", region=self.settings.aws_region)

        return self._df_client

    async def _boto_call(self, method: str, **kwargs: Any) -> dict[str, Any]:
        """Run a boto3 call in a thread, translating failures to TransportError."""
        client = self._get_boto_client()
        fn = getattr(client, method)
        try:
            return await asyncio.to_thread(fn, **kwargs)
        except (BotoCoreError, ClientError) as e:
            logger.warning("Device Farm call failed", method=method, error=str(e))
            raise TransportError(f"{method} failed: {e}", operation=method) from e

    async def _list_all(self, method: str, key: str, **kwargs: Any) -> list[dict[str, Any]]:
        """Collect ``key`` from every page of a list call."""
        items: list[dict[str, Any]] = []
        next_token: Optional[str] = None
        while True:
            if next_token:
                kwargs["nextToken"] = next_token
            response = await self._boto_call(method, **kwargs)
            items.extend(response.get(key, []))
            next_token = response.get("nextToken")
            if not next_token:
                return items

    # ── RemoteGateway interface ───────────────────────────────────

    async def list_devices(self) -> list[Device]:
        items = await self._list_all("list_devices", "devices")
        logger.debug("Listed devices", count=len(items))
        return [Device.from_api(d) for d in items]

    async def list_device_pools(self, project_arn: str) -> list[DevicePool]:
        items = await self._list_all("list_device_pools", "devicePools", arn=project_arn)
        return [DevicePool.from_api(p) for p in items]

    async def create_device_pool(
        self,
        project_arn: str,
        name: str,
        rules: list[Rule],
        description: str = "",
    ) -> DevicePool:
        kwargs: dict[str, Any] = {
            "projectArn": project_arn,
            "name": name,
            "rules": [r.to_api() for r in rules],
        }
        if description:
            kwargs["description"] = description

        response = await self._boto_call("create_device_pool", **kwargs)
        pool = DevicePool.from_api(response.get("devicePool", {}))
        logger.info("Device pool created", pool_arn=pool.arn, name=name)
        return pool

    async def update_device_pool(
        self,
        pool_arn: str,
        rules: list[Rule],
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> DevicePool:
        kwargs: dict[str, Any] = {
            "arn": pool_arn,
            "rules": [r.to_api() for r in rules],
        }
        if name is not None:
            kwargs["name"] = name
        if description is not None:
            kwargs["description"] = description

        response = await self._boto_call("update_device_pool", **kwargs)
        pool = DevicePool.from_api(response.get("devicePool", {}))
        logger.info("Device pool updated", pool_arn=pool.arn)
        return pool

    async def create_upload(
        self,
        project_arn: str,
        name: str,
        upload_type: str,
        content_type: Optional[str] = None,
    ) -> Upload:
        kwargs: dict[str, Any] = {
            "projectArn": project_arn,
            "name": name,
            "type": upload_type,
        }
        if content_type:
            kwargs["contentType"] = content_type

        response = await self._boto_call("create_upload", **kwargs)
        upload = Upload.from_api(response.get("upload", {}))
        logger.info("Upload created", upload_arn=upload.arn, type=upload_type)
        return upload

    async def get_upload(self, upload_arn: str) -> Upload:
        response = await self._boto_call("get_upload", arn=upload_arn)
        return Upload.from_api(response.get("upload", {}))
