"""
Pytest configuration for image hub tests.

Usage:
    pytest testing/
    pytest testing/test_service.py -k order
"""

import os
from collections.abc import Generator

import pytest

# Keep test logs apart from the server's logs/ files
os.environ.setdefault("IMAGEHUB_LOG_DIR", "logs/test")

from core.images import ImageConfig  # noqa: E402
from core.logging import end_run, start_run  # noqa: E402


@pytest.fixture(autouse=True)
def logging_run(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Rotate logs at test module boundaries.

    Each test module gets its own logging run, which triggers log rotation
    on first write to each module's log file.

    When running with pytest-xdist, each worker uses a separate log directory
    to prevent file corruption from concurrent writes.
    """
    worker_id = os.environ.get("PYTEST_XDIST_WORKER")
    if worker_id:
        os.environ["IMAGEHUB_LOG_DIR"] = f"logs/test-{worker_id}"

    # Use test module path as run identifier (e.g., "test-testing-test_service")
    test_path = request.node.nodeid.split("::")[0]
    test_name = test_path.replace("/", "-").replace(".py", "")
    start_run(f"test-{test_name}")
    yield
    end_run()


@pytest.fixture
def image_config() -> ImageConfig:
    """Config with every provider credential set."""
    return ImageConfig(
        unsplash_access_key="unsplash-key",
        pixabay_api_key="pixabay-key",
        pixabay_url="https://pixabay.com/api/",
        pexels_api_key="pexels-key",
        unsplash_order_by="relevant",
        timeout=5.0,
        provider_timeout=2.0,
    )


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests requiring external services",
    )
