"""
Device Farm Client
==================

High-level façade that combines device filtering, pool rules and upload
polling with the remote gateway.

Usage:
    from farmhand.client import create_client

    client = create_client()
    devices = await client.search_devices("pixel", android_only=True)
    pool = await client.ensure_device_pool(
        project_arn, "nightly", [d.arn for d in devices]
    )
    app = await client.upload_file(project_arn, "build/app.apk", "ANDROID_APP")
    await client.wait_for_uploads_to_succeed(600_000, 5_000, app.arn)
    await client.close()
"""

from pathlib import Path
from typing import Optional, Sequence, Union

from farmhand.config import Settings, get_settings
from farmhand.devices.catalog import filter_devices
from farmhand.devices.models import Device, DevicePool, Upload
from farmhand.devices.rules import build_rules, device_pool_matches
from farmhand.gateway.base import BlobData, BlobTransfer, RemoteGateway
from farmhand.uploads.poller import wait_for_completion
from farmhand.utils.logger import get_logger

logger = get_logger(__name__)


class DeviceFarmClient:
    """
    Orchestrates multi-step Device Farm operations.

    Errors from the gateway and blob transfer are never retried here;
    they propagate to the caller as ``TransportError``.
    """

    def __init__(self, gateway: RemoteGateway, blob_transfer: BlobTransfer) -> None:
        """
        Initialize the client.

        Args:
            gateway: Device Farm API access.
            blob_transfer: Storage used for artifact uploads.
        """
        self.gateway = gateway
        self.blob_transfer = blob_transfer

    # ── Devices ───────────────────────────────────────────────────

    async def search_devices(
        self,
        query: str = "",
        android_only: bool = False,
        ios_only: bool = False,
    ) -> list[Device]:
        """
        Search available devices by name and platform.

        Returns:
            Matching devices sorted by name.
        """
        devices = await self.gateway.list_devices()
        return filter_devices(devices, query, android_only, ios_only)

    # ── Device pools ──────────────────────────────────────────────

    async def list_device_pools(self, project_arn: str) -> list[DevicePool]:
        """List the device pools of a project."""
        return await self.gateway.list_device_pools(project_arn)

    async def create_device_pool(
        self,
        project_arn: str,
        name: str,
        device_arns: Sequence[str],
        description: str = "",
    ) -> DevicePool:
        """Create a pool containing exactly ``device_arns``."""
        rules = build_rules(device_arns)
        return await self.gateway.create_device_pool(project_arn, name, rules, description)

    async def update_device_pool(
        self,
        pool: DevicePool,
        device_arns: Sequence[str],
    ) -> DevicePool:
        """Replace the devices of ``pool`` with ``device_arns``."""
        rules = build_rules(device_arns)
        return await self.gateway.update_device_pool(pool.arn, rules, name=pool.name)

    def device_pool_matches(self, pool: DevicePool, device_arns: Sequence[str]) -> bool:
        """Check whether ``pool`` targets exactly ``device_arns``."""
        return device_pool_matches(pool, device_arns)

    async def ensure_device_pool(
        self,
        project_arn: str,
        name: str,
        device_arns: Sequence[str],
        description: str = "",
    ) -> DevicePool:
        """
        Make sure a pool named ``name`` contains exactly ``device_arns``.

        Reuses a matching pool, updates a pool with the same name whose
        devices differ, or creates a new pool.

        Returns:
            The pool that now targets ``device_arns``.
        """
        pools = await self.list_device_pools(project_arn)
        existing = next((p for p in pools if p.name == name), None)

        if existing is None:
            logger.info("Creating device pool", name=name, devices=len(device_arns))
            return await self.create_device_pool(project_arn, name, device_arns, description)

        if self.device_pool_matches(existing, device_arns):
            logger.debug("Device pool already up to date", pool_arn=existing.arn)
            return existing

        logger.info("Updating device pool", pool_arn=existing.arn, devices=len(device_arns))
        return await self.update_device_pool(existing, device_arns)

    # ── Uploads ───────────────────────────────────────────────────

    async def upload_to_s3(
        self,
        url: str,
        data: BlobData,
        content_type: Optional[str] = None,
    ) -> None:
        """PUT ``data`` to a pre-signed S3 URL."""
        await self.blob_transfer.put(url, data, content_type)

    async def upload_file(
        self,
        project_arn: str,
        path: Union[str, Path],
        upload_type: str,
        content_type: Optional[str] = None,
    ) -> Upload:
        """
        Upload a local artifact to Device Farm.

        Opens the file, registers the upload, then streams the file to
        the returned URL. A missing or unreadable file raises before
        anything is registered on the service.
        Processing continues on the service side; use
        ``wait_for_uploads_to_succeed`` to wait for it.

        Args:
            project_arn: Project to upload into.
            path: Local file path. Its name is used as the upload name.
            upload_type: Device Farm upload type, e.g. ANDROID_APP.
            content_type: Optional MIME type.

        Returns:
            The created upload.
        """
        path = Path(path)
        with path.open("rb") as f:
            upload = await self.gateway.create_upload(
                project_arn, path.name, upload_type, content_type
            )
            if not upload.url:
                raise ValueError(f"Upload {upload.arn} has no pre-signed URL")
            await self.upload_to_s3(upload.url, f, content_type)

        logger.info("Artifact uploaded", upload_arn=upload.arn, file=path.name)
        return upload

    async def wait_for_uploads_to_succeed(
        self,
        timeout_ms: int,
        interval_ms: int,
        *upload_arns: str,
    ) -> None:
        """
        Wait until every upload has been processed successfully.

        Raises:
            UploadFailedError: An upload failed processing.
            UploadTimeoutError: Uploads were still pending at the deadline.
            TransportError: A status lookup failed.
        """
        await wait_for_completion(
            self.gateway.get_upload_status,
            upload_arns,
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
        )

    async def close(self) -> None:
        """Release network resources."""
        await self.blob_transfer.close()


def create_client(settings: Optional[Settings] = None) -> DeviceFarmClient:
    """
    Factory function to create an AWS-backed client.

    Args:
        settings: Settings to use. Defaults to ``get_settings()``.

    Returns:
        Configured DeviceFarmClient instance.
    """
    from farmhand.gateway.aws import AWSDeviceFarmGateway
    from farmhand.gateway.blob import S3BlobTransfer

    settings = settings or get_settings()
    return DeviceFarmClient(
        gateway=AWSDeviceFarmGateway(settings.device_farm),
        blob_transfer=S3BlobTransfer(settings.polling.blob_timeout_seconds),
    )
