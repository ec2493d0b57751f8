"""
Error Types
===========

Exceptions raised by farmhand. Every error derives from ``FarmError`` so
callers can catch the whole family in one place.
"""

from typing import Optional, Sequence


class FarmError(Exception):
    """Base exception for all farmhand errors."""

    pass


class TransportError(FarmError):
    """Raised when a gateway or blob transfer call fails."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation


class UploadFailedError(FarmError):
    """Raised when an upload job reaches the FAILED state."""

    def __init__(self, job_id: str, status: str = "FAILED", message: str = ""):
        detail = f": {message}" if message else ""
        super().__init__(f"Upload {job_id} finished with status {status}{detail}")
        self.job_id = job_id
        self.status = status


class UploadTimeoutError(FarmError, TimeoutError):
    """Raised when uploads are still pending after the polling deadline."""

    def __init__(self, pending: Sequence[str], timeout_ms: int):
        super().__init__(
            f"Timed out after {timeout_ms}ms waiting for uploads: {', '.join(pending)}"
        )
        self.pending = list(pending)
        self.timeout_ms = timeout_ms


class DetachedHeadError(FarmError):
    """Raised when a git repository looks like it is in a detached state."""

    pass
