"""
Devices Module
==============

Device Farm data model plus the pure logic that works on it.

This package contains:
    - models: Device, DevicePool, Rule and Upload dataclasses
    - catalog: Device search by name and platform
    - rules: Build and match ARN-based device pool rules
"""

from farmhand.devices.catalog import filter_devices
from farmhand.devices.models import (
    Device,
    DevicePlatform,
    DevicePool,
    Rule,
    RuleAttribute,
    RuleOperator,
    Upload,
    UploadStatus,
)
from farmhand.devices.rules import build_rules, device_pool_matches

__all__ = [
    "Device",
    "DevicePlatform",
    "DevicePool",
    "Rule",
    "RuleAttribute",
    "RuleOperator",
    "Upload",
    "UploadStatus",
    "build_rules",
    "device_pool_matches",
    "filter_devices",
]
