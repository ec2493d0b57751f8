"""
Upload Completion Poller
========================

Waits for Device Farm uploads to finish processing.

Device Farm processes uploads asynchronously: after the file lands in S3
the upload moves INITIALIZED → PROCESSING → SUCCEEDED (or FAILED). This
module polls a status accessor until every upload has succeeded, one has
failed, or a deadline passes.

Usage:
    await wait_for_completion(
        gateway.get_upload_status,
        [app_arn, test_arn],
        timeout_ms=600_000,
        interval_ms=5_000,
    )
"""

import asyncio
import time
from typing import Awaitable, Callable, Sequence

from farmhand.devices.models import UploadStatus
from farmhand.errors import UploadFailedError, UploadTimeoutError
from farmhand.utils.logger import get_logger

logger = get_logger(__name__)

StatusAccessor = Callable[[str], Awaitable[str]]


async def wait_for_completion(
    get_status: StatusAccessor,
    job_ids: Sequence[str],
    *,
    timeout_ms: int,
    interval_ms: int,
) -> None:
    """
    Poll ``get_status`` until all jobs succeed.

    Each tick checks every job in the order given. The first tick always
    runs; the deadline is only consulted before sleeping for the next one.
    A zero or negative ``interval_ms`` polls back-to-back, still yielding
    to the event loop between ticks.

    Args:
        get_status: Coroutine function returning the raw status of a job.
        job_ids: Jobs to wait for.
        timeout_ms: Deadline measured from the start of the first tick.
        interval_ms: Delay between ticks.

    Raises:
        UploadFailedError: A job reached FAILED. The first failing job in
            ``job_ids`` order is reported.
        UploadTimeoutError: Jobs were still pending after ``timeout_ms``.
        TransportError: Propagated unchanged from ``get_status``.
    """
    started = time.monotonic()
    delay = max(interval_ms, 0) / 1000
    tick = 0

    while True:
        tick += 1
        pending: list[str] = []
        statuses: dict[str, str] = {}

        for job_id in job_ids:
            status = await get_status(job_id)
            statuses[job_id] = status
            if status == UploadStatus.FAILED.value:
                raise UploadFailedError(job_id, status)
            if status != UploadStatus.SUCCEEDED.value:
                pending.append(job_id)

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.debug("Upload poll", tick=tick, statuses=statuses, elapsed_ms=int(elapsed_ms))

        if not pending:
            return
        if elapsed_ms > timeout_ms:
            raise UploadTimeoutError(pending, timeout_ms)

        await asyncio.sleep(delay)
