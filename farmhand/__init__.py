"""
farmhand
========

Client-side orchestration for AWS Device Farm.

This package searches test devices, manages device pools, uploads test
artifacts to pre-signed S3 URLs and waits for the service to finish
processing them.

Modules:
    - devices: Device/pool models, catalog filtering, pool rule matching
    - uploads: Upload completion polling
    - gateway: Remote service gateway (boto3) and blob transfer (aiohttp)
    - client: High-level DeviceFarmClient façade
    - utils: Logging and local git/shell helpers
"""

__version__ = "1.0.0"
__author__ = "farmhand maintainers"
