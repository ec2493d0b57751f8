"""
Remote Service Gateway Abstraction
==================================

Abstract base classes for the two collaborators farmhand talks to:

- ``RemoteGateway``: the Device Farm API (devices, pools, uploads)
- ``BlobTransfer``: HTTP PUT of artifact bytes to a pre-signed URL

The production implementations live in ``farmhand.gateway.aws`` and
``farmhand.gateway.blob``. Tests substitute in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, Optional, Union

from farmhand.devices.models import Device, DevicePool, Rule, Upload

BlobData = Union[bytes, BinaryIO]


class RemoteGateway(ABC):
    """
    Abstract interface to the Device Farm API.

    Every method may raise ``TransportError`` when the call fails.
    """

    @abstractmethod
    async def list_devices(self) -> list[Device]:
        """
        List every device the account can test on.

        Returns:
            Devices in the order the service returned them.
        """
        pass

    @abstractmethod
    async def list_device_pools(self, project_arn: str) -> list[DevicePool]:
        """
        List the device pools of a project.

        Args:
            project_arn: Project ARN.

        Returns:
            Curated and private pools of the project.
        """
        pass

    @abstractmethod
    async def create_device_pool(
        self,
        project_arn: str,
        name: str,
        rules: list[Rule],
        description: str = "",
    ) -> DevicePool:
        """
        Create a device pool.

        Args:
            project_arn: Project the pool belongs to.
            name: Pool name.
            rules: Membership rules.
            description: Optional description.

        Returns:
            The pool as created by the service.
        """
        pass

    @abstractmethod
    async def update_device_pool(
        self,
        pool_arn: str,
        rules: list[Rule],
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> DevicePool:
        """
        Replace the rules of an existing device pool.

        Args:
            pool_arn: Pool to update.
            rules: New membership rules.
            name: New name, or None to keep the current one.
            description: New description, or None to keep the current one.

        Returns:
            The pool as updated by the service.
        """
        pass

    @abstractmethod
    async def create_upload(
        self,
        project_arn: str,
        name: str,
        upload_type: str,
        content_type: Optional[str] = None,
    ) -> Upload:
        """
        Register a new upload and obtain its pre-signed URL.

        Args:
            project_arn: Project the upload belongs to.
            name: File name (the extension matters to Device Farm).
            upload_type: Upload type, e.g. ANDROID_APP.
            content_type: Optional MIME type of the artifact.

        Returns:
            Upload with ``url`` set.
        """
        pass

    @abstractmethod
    async def get_upload(self, upload_arn: str) -> Upload:
        """
        Fetch an upload.

        Args:
            upload_arn: Upload ARN.

        Returns:
            Current state of the upload.
        """
        pass

    async def get_upload_status(self, upload_arn: str) -> str:
        """Return the raw processing status of an upload."""
        upload = await self.get_upload(upload_arn)
        return upload.status


class BlobTransfer(ABC):
    """Abstract interface for pushing artifact bytes to storage."""

    @abstractmethod
    async def put(
        self,
        url: str,
        data: BlobData,
        content_type: Optional[str] = None,
    ) -> None:
        """
        PUT ``data`` to ``url``.

        Raises:
            TransportError: On a non-2xx response or connection failure.
        """
        pass

    async def close(self) -> None:
        """Release any held connections."""
        pass
