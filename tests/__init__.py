"""
Test Package
============

Unit tests for farmhand.

Test organization:
    - test_catalog.py: Device search filtering
    - test_rules.py: Device pool rule building and matching
    - test_poller.py: Upload completion polling
    - test_client.py: DeviceFarmClient orchestration
    - test_aws_gateway.py / test_blob.py: boto3 gateway and S3 PUT transfer
    - test_shell.py: git and shell helpers
    - test_cli.py / test_config.py / test_models.py

Run tests with:
    pytest tests/ -v
"""
