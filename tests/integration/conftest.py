"""Shared fixtures for integration tests.

Integration tests only run with RUN_SHARDPOLL_NETWORK_TESTS=1 and need
AWS_KINESIS_STREAM (plus AWS_KINESIS_ENDPOINT for local emulators).
"""

import os

import pytest


@pytest.fixture
def kinesis_endpoint():
    return os.environ.get("AWS_KINESIS_ENDPOINT")


@pytest.fixture
def kinesis_stream():
    name = os.environ.get("AWS_KINESIS_STREAM")
    if not name:
        pytest.skip("AWS_KINESIS_STREAM is not set")
    return name
