"""
Device Catalog Filter
=====================

Narrows a device list by name and platform and returns it sorted by name.
"""

from typing import Iterable

from farmhand.devices.models import Device, DevicePlatform


def filter_devices(
    devices: Iterable[Device],
    query: str = "",
    android_only: bool = False,
    ios_only: bool = False,
) -> list[Device]:
    """
    Filter and sort devices.

    A device is kept when its platform passes the platform flags and,
    if ``query`` is non-empty, ``query`` appears in its name ignoring case.
    Setting both ``android_only`` and ``ios_only`` cancels the platform
    restriction instead of returning nothing.

    Args:
        devices: Devices to filter (not modified).
        query: Case-insensitive substring to look for in device names.
        android_only: Keep only Android devices.
        ios_only: Keep only iOS devices.

    Returns:
        Matching devices sorted ascending by name. Devices with equal
        names keep their input order.
    """
    platform = None
    if android_only and not ios_only:
        platform = DevicePlatform.ANDROID.value
    elif ios_only and not android_only:
        platform = DevicePlatform.IOS.value

    needle = query.lower()
    matches = [
        device
        for device in devices
        if (platform is None or device.platform == platform)
        and (not needle or needle in device.name.lower())
    ]
    return sorted(matches, key=lambda device: device.name)
