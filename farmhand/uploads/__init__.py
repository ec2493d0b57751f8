"""
Uploads Module
==============

Waiting on Device Farm upload processing.
"""

from farmhand.uploads.poller import StatusAccessor, wait_for_completion

__all__ = ["StatusAccessor", "wait_for_completion"]
