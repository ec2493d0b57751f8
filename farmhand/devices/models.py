"""
Device Farm Data Model
======================

Dataclasses for the Device Farm objects farmhand reads and writes:
devices, device pools with their rules, and uploads.

Every model has a ``from_api`` constructor that accepts the dict shape
returned by boto3 (camelCase keys). Missing keys fall back to empty
values so partially populated responses still parse.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class DevicePlatform(str, Enum):
    """Device platforms reported by Device Farm."""

    ANDROID = "ANDROID"
    IOS = "IOS"


class RuleAttribute(str, Enum):
    """Rule attributes farmhand understands."""

    ARN = "ARN"


class RuleOperator(str, Enum):
    """Rule operators farmhand understands."""

    IN = "IN"


class UploadStatus(str, Enum):
    """
    Upload processing states.

    INITIALIZED and PROCESSING are in-progress; SUCCEEDED and FAILED are
    terminal. Unknown values from the service are kept as plain strings
    and treated as in-progress.
    """

    INITIALIZED = "INITIALIZED"
    PROCESSING = "PROCESSING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Device:
    """
    A device available for testing.

    Attributes:
        arn: Device ARN (opaque identifier).
        name: Display name, e.g. "Google Pixel 8".
        platform: Platform tag, one of ``DevicePlatform`` values.
        os: OS version string.
        model: Model name.
        manufacturer: Device manufacturer.
        remote_access_enabled: Whether remote access sessions are allowed.
    """

    arn: str
    name: str
    platform: str
    os: str = ""
    model: str = ""
    manufacturer: str = ""
    remote_access_enabled: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Device":
        return cls(
            arn=data.get("arn", ""),
            name=data.get("name", ""),
            platform=data.get("platform", ""),
            os=data.get("os", ""),
            model=data.get("model", ""),
            manufacturer=data.get("manufacturer", ""),
            remote_access_enabled=data.get("remoteAccessEnabled", False),
        )


@dataclass(frozen=True)
class Rule:
    """A single device pool rule: ``attribute operator value``."""

    attribute: str
    operator: str
    value: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Rule":
        return cls(
            attribute=data.get("attribute", ""),
            operator=data.get("operator", ""),
            value=data.get("value", ""),
        )

    def to_api(self) -> dict[str, str]:
        """Return the request shape expected by boto3."""
        return {
            "attribute": self.attribute,
            "operator": self.operator,
            "value": self.value,
        }


@dataclass
class DevicePool:
    """
    A named, rule-defined set of devices.

    Attributes:
        arn: Pool ARN.
        name: Pool name (unique per project by convention).
        description: Free-text description.
        rules: Rules that define membership.
        type: CURATED (AWS-managed) or PRIVATE.
    """

    arn: str
    name: str = ""
    description: str = ""
    rules: list[Rule] = field(default_factory=list)
    type: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "DevicePool":
        return cls(
            arn=data.get("arn", ""),
            name=data.get("name", ""),
            description=data.get("description", ""),
            rules=[Rule.from_api(r) for r in data.get("rules", [])],
            type=data.get("type", ""),
        )


@dataclass
class Upload:
    """
    An uploaded artifact and its processing state.

    Attributes:
        arn: Upload ARN, used as the job identifier when polling.
        name: File name given at creation.
        status: Raw status string (see ``UploadStatus``).
        type: Upload type, e.g. ANDROID_APP.
        url: Pre-signed S3 PUT URL (only returned on creation).
        message: Service message, usually set when processing failed.
    """

    arn: str
    name: str = ""
    status: str = UploadStatus.INITIALIZED.value
    type: str = ""
    url: Optional[str] = None
    message: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Upload":
        return cls(
            arn=data.get("arn", ""),
            name=data.get("name", ""),
            status=data.get("status", UploadStatus.INITIALIZED.value),
            type=data.get("type", ""),
            url=data.get("url"),
            message=data.get("message", ""),
        )
