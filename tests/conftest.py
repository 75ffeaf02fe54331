"""Shared fixtures for n3h-pin tests."""

import hashlib
import json
import sys
from pathlib import Path

import pytest

# Add project root to path so we can import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Config
from platforms import PLATFORMS


TAG = "v0.0.4-alpha1"
VERSION = "0.0.4-alpha1"
COMMIT = "0a1b2c3d4e5f"


@pytest.fixture
def sample_config(tmp_path):
    """Pre-configured Config instance for testing."""
    return Config(
        host="github.com",
        api_host="api.github.com",
        org="holochain",
        repo="n3h",
        output_path=tmp_path / "pins" / "n3h_pin.json",
        user_agent="test-agent/1.0",
        max_redirects=5,
        timeout=5.0,
    )


@pytest.fixture
def config_toml_content():
    """Sample config.toml content."""
    return """
host = "git.example.com"
api_host = "api.git.example.com"
org = "example"
repo = "widget"
output_path = "/tmp/custom-pin.json"
max_redirects = 2
timeout = 10
"""


def checksum_body(platform) -> str:
    digest = hashlib.sha256(platform.descriptor.encode()).hexdigest()
    return f"{digest}  n3h-{VERSION}-{platform.descriptor}\n"


@pytest.fixture
def mock_checksums(httpx_mock, sample_config):
    """Register a well-formed checksum file for every platform.

    Returns a dict of descriptor -> checksum file body.
    """
    bodies = {}
    for platform in PLATFORMS:
        body = checksum_body(platform)
        bodies[platform.descriptor] = body
        httpx_mock.add_response(
            url=sample_config.checksum_url(TAG, VERSION, platform.descriptor),
            text=body,
        )
    return bodies


@pytest.fixture
def mock_release(httpx_mock, sample_config, mock_checksums):
    """Register package, release and checksum responses for a full release."""
    httpx_mock.add_response(
        url=sample_config.package_url(TAG),
        content=json.dumps({"name": "n3h", "version": VERSION}).encode(),
    )
    httpx_mock.add_response(
        url=sample_config.release_url(TAG),
        content=json.dumps({"tag_name": TAG, "target_commitish": COMMIT}).encode(),
    )
    return mock_checksums
