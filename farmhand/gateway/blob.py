"""
S3 Blob Transfer
================

Uploads artifact bytes to the pre-signed S3 URL that Device Farm hands
out in ``create_upload``.
"""

import asyncio
from typing import Optional

import aiohttp

from farmhand.errors import TransportError
from farmhand.gateway.base import BlobData, BlobTransfer
from farmhand.utils.logger import get_logger

logger = get_logger(__name__)


class S3BlobTransfer(BlobTransfer):
    """PUT artifacts to pre-signed URLs with aiohttp."""

    def __init__(self, timeout_seconds: float = 300.0) -> None:
        self.timeout_seconds = timeout_seconds
        self._http_session: Optional[aiohttp.ClientSession] = None

    async def _get_http_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._http_session is None or self._http_session.closed:
            self._http_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            )
        return self._http_session

    async def put(
        self,
        url: str,
        data: BlobData,
        content_type: Optional[str] = None,
    ) -> None:
        headers = {"Content-Type": content_type} if content_type else None
        session = await self._get_http_session()

        try:
            async with session.put(url, data=data, headers=headers) as response:
                if response.status >= 300:
                    error_text = await response.text()
                    raise TransportError(
                        f"S3 upload failed ({response.status}): {error_text}",
                        operation="put",
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("S3 upload failed", error=str(e))
            raise TransportError(f"S3 upload failed: {e}", operation="put") from e

        logger.debug("S3 upload complete", status=response.status)

    async def close(self) -> None:
        if self._http_session and not self._http_session.closed:
            await self._http_session.close()
        self._http_session = None
