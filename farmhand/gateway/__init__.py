"""
Gateway Module
==============

Access to the remote services farmhand depends on.

This package contains:
    - base: RemoteGateway and BlobTransfer abstract interfaces
    - aws: boto3-backed Device Farm gateway
    - blob: aiohttp-backed S3 PUT transfer
"""

from farmhand.gateway.aws import AWSDeviceFarmGateway
from farmhand.gateway.base import BlobData, BlobTransfer, RemoteGateway
from farmhand.gateway.blob import S3BlobTransfer

__all__ = [
    "AWSDeviceFarmGateway",
    "BlobData",
    "BlobTransfer",
    "RemoteGateway",
    "S3BlobTransfer",
]
