"""
Shared Test Fixtures
====================

Pytest fixtures used across all test modules.

Provides in-memory implementations of the gateway interfaces so tests
exercise real control flow without talking to AWS.
"""

from typing import Any, Optional

import pytest
import structlog

from farmhand.client import DeviceFarmClient
from farmhand.devices.models import Device, DevicePlatform, DevicePool, Rule, Upload
from farmhand.errors import TransportError
from farmhand.gateway.base import BlobData, BlobTransfer, RemoteGateway

PROJECT_ARN = "arn:aws:devicefarm:us-west-2:123:project:test"

# Route structlog through stdlib logging so pytest captures it instead of
# it landing on stdout next to CLI output
structlog.configure(
    processors=[structlog.processors.KeyValueRenderer()],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)


class FakeGateway(RemoteGateway):
    """
    RemoteGateway backed by plain attributes.

    ``upload_statuses`` maps an upload ARN to the statuses returned by
    successive ``get_upload`` calls; the last status repeats once the
    sequence is exhausted. ``failures`` maps a method name to an exception
    raised by that method. Every call is appended to ``calls``.
    """

    def __init__(self) -> None:
        self.devices: list[Device] = []
        self.pools: list[DevicePool] = []
        self.upload_statuses: dict[str, list[str]] = {}
        self.failures: dict[str, Exception] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._created = 0

    def _record(self, method: str, **kwargs: Any) -> None:
        self.calls.append((method, kwargs))
        if method in self.failures:
            raise self.failures[method]

    def calls_to(self, method: str) -> list[dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == method]

    async def list_devices(self) -> list[Device]:
        self._record("list_devices")
        return list(self.devices)

    async def list_device_pools(self, project_arn: str) -> list[DevicePool]:
        self._record("list_device_pools", project_arn=project_arn)
        return list(self.pools)

    async def create_device_pool(
        self,
        project_arn: str,
        name: str,
        rules: list[Rule],
        description: str = "",
    ) -> DevicePool:
        self._record(
            "create_device_pool",
            project_arn=project_arn,
            name=name,
            rules=rules,
            description=description,
        )
        self._created += 1
        pool = DevicePool(
            arn=f"arn:pool:{self._created}",
            name=name,
            description=description,
            rules=list(rules),
            type="PRIVATE",
        )
        self.pools.append(pool)
        return pool

    async def update_device_pool(
        self,
        pool_arn: str,
        rules: list[Rule],
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> DevicePool:
        self._record(
            "update_device_pool",
            pool_arn=pool_arn,
            rules=rules,
            name=name,
            description=description,
        )
        for pool in self.pools:
            if pool.arn == pool_arn:
                pool.rules = list(rules)
                if name is not None:
                    pool.name = name
                return pool
        return DevicePool(arn=pool_arn, name=name or "", rules=list(rules))

    async def create_upload(
        self,
        project_arn: str,
        name: str,
        upload_type: str,
        content_type: Optional[str] = None,
    ) -> Upload:
        self._record(
            "create_upload",
            project_arn=project_arn,
            name=name,
            upload_type=upload_type,
            content_type=content_type,
        )
        arn = f"arn:upload:{name}"
        return Upload(arn=arn, name=name, type=upload_type, url=f"https://s3.test/{name}")

    async def get_upload(self, upload_arn: str) -> Upload:
        self._record("get_upload", upload_arn=upload_arn)
        statuses = self.upload_statuses[upload_arn]
        status = statuses.pop(0) if len(statuses) > 1 else statuses[0]
        return Upload(arn=upload_arn, status=status)


class FakeBlobTransfer(BlobTransfer):
    """BlobTransfer that records PUTs in memory."""

    def __init__(self) -> None:
        self.puts: list[tuple[str, bytes, Optional[str]]] = []
        self.error: Optional[Exception] = None
        self.closed = False

    async def put(self, url: str, data: BlobData, content_type: Optional[str] = None) -> None:
        if self.error:
            raise self.error
        body = data if isinstance(data, bytes) else data.read()
        self.puts.append((url, body, content_type))

    async def close(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------

@pytest.fixture
def android_device() -> Device:
    return Device(arn="arn123", name="Samsung Galaxy S3", platform=DevicePlatform.ANDROID.value)


@pytest.fixture
def ios_device() -> Device:
    return Device(arn="arn456", name="Apple iPhone 6S", platform=DevicePlatform.IOS.value)


@pytest.fixture
def sample_devices(android_device: Device, ios_device: Device) -> list[Device]:
    """A small unsorted catalog with both platforms."""
    return [
        android_device,
        ios_device,
        Device(arn="arn789", name="Google Pixel 8", platform=DevicePlatform.ANDROID.value),
        Device(arn="arn000", name="Apple iPad Air", platform=DevicePlatform.IOS.value),
    ]


# ---------------------------------------------------------------------------
# Gateway / client
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def fake_blob() -> FakeBlobTransfer:
    return FakeBlobTransfer()


@pytest.fixture
def client(fake_gateway: FakeGateway, fake_blob: FakeBlobTransfer) -> DeviceFarmClient:
    return DeviceFarmClient(fake_gateway, fake_blob)


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("fake error", operation="test")
