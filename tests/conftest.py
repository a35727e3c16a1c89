"""Pytest configuration and shared fixtures for discocli tests."""

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import httpx
import pytest

from discocli.core.config import AppConfig, DiscoConfig
from discocli.core.disco import DiscoClient
from discocli.core.pkg import Pkg

API_URL = "https://disco.test/disco/v3.0/"
DOWNLOAD_URL = "https://cdn.test/zulu17.32.13-ca-jdk17.0.2-linux_x64.tar.gz"


def catalog_entry(**overrides: Any) -> dict[str, Any]:
    """One entry of a ``/packages`` result array."""
    entry = {
        "id": "4b6d8a3b1f3a26ab56e1f8d67d0b4ea1",
        "archive_type": "tar.gz",
        "distribution": "zulu",
        "major_version": 17,
        "java_version": "17.0.2+8",
        "distribution_version": "17.32.13",
        "release_status": "ga",
        "term_of_support": "lts",
        "operating_system": "linux",
        "lib_c_type": "glibc",
        "architecture": "x64",
        "fpu": "unknown",
        "package_type": "jdk",
        "javafx_bundled": False,
        "directly_downloadable": True,
        "filename": "zulu17.32.13-ca-jdk17.0.2-linux_x64.tar.gz",
        "ephemeral_id": "eph-17-0-2",
        "latest_build_available": True,
        "free_use_in_production": True,
        "tck_tested": "unknown",
        "aqavit_certified": "unknown",
        "size": 190_000_000,
    }
    entry.update(overrides)
    return entry


class FakeCatalog:
    """Routes requests of an ``httpx.MockTransport`` and records them."""

    api_url = API_URL
    download_url = DOWNLOAD_URL

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.packages: list[dict[str, Any]] = []
        self.packages_status = 200
        self.queued_packages: list[list[dict[str, Any]]] = []
        self.details: dict[str, dict[str, Any]] = {}
        self.downloads: dict[str, bytes] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        path = request.url.path
        if url.startswith(API_URL) and path.endswith("/packages"):
            if self.packages_status != 200:
                return httpx.Response(self.packages_status, json={"result": [], "message": "error"})
            if self.queued_packages:
                return httpx.Response(200, json={"result": self.queued_packages.pop(0)})
            return httpx.Response(200, json={"result": self.packages})
        if url.startswith(API_URL) and "/ids/" in path:
            package_id = path.rsplit("/", 1)[-1]
            detail = self.details.get(package_id)
            return httpx.Response(200, json={"result": [detail] if detail else []})
        if url in self.downloads:
            return httpx.Response(200, content=self.downloads[url])
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def search_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/packages")]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    """Catalog with a single Zulu 17.0.2 package and its download."""
    catalog = FakeCatalog()
    catalog.packages = [catalog_entry()]
    catalog.details["4b6d8a3b1f3a26ab56e1f8d67d0b4ea1"] = {
        "filename": "zulu17.32.13-ca-jdk17.0.2-linux_x64.tar.gz",
        "direct_download_uri": DOWNLOAD_URL,
    }
    catalog.downloads[DOWNLOAD_URL] = b"\x1f\x8b" + b"jdk" * 1000
    return catalog


@pytest.fixture
def disco_config() -> DiscoConfig:
    return DiscoConfig(api_url=API_URL, timeout=5.0)


@pytest.fixture
def disco_client(fake_catalog: FakeCatalog, disco_config: DiscoConfig) -> Generator[DiscoClient, None, None]:
    """Disco client talking to the fake catalog."""
    with DiscoClient(disco_config, transport=fake_catalog.transport) as client:
        yield client


@pytest.fixture
def client_factory(fake_catalog: FakeCatalog) -> Callable[[DiscoConfig], DiscoClient]:
    """Replacement for the ``DiscoClient`` class used by the commands."""

    def factory(config: DiscoConfig | None = None) -> DiscoClient:
        return DiscoClient(DiscoConfig(api_url=API_URL), transport=fake_catalog.transport)

    return factory


@pytest.fixture
def make_entry() -> Callable[..., dict[str, Any]]:
    """Catalog entries with overrides."""
    return catalog_entry


@pytest.fixture
def make_pkg() -> Callable[..., Pkg]:
    """Build packages from catalog entries with overrides."""

    def factory(**overrides: Any) -> Pkg:
        return Pkg.from_json(catalog_entry(**overrides))

    return factory


@pytest.fixture
def mock_console() -> Mock:
    """Create standardized mock Rich console for CLI testing.

    Printed text is collected in ``printed_lines`` with Rich markup removed.
    """
    import re

    console = Mock()
    console.printed_lines = []

    def track_print(text="", **kwargs):
        console.printed_lines.append(re.sub(r"\[/?[^\]]*\]", "", str(text)))

    console.print.side_effect = track_print
    return console


@pytest.fixture
def mock_config() -> AppConfig:
    """Application config pointing at the fake catalog."""
    return AppConfig(api_url=API_URL, timeout=5.0)


@pytest.fixture
def mock_cli_context(mock_config: AppConfig, mock_console: Mock) -> Mock:
    """Create standardized mock Click context for CLI testing."""
    ctx = Mock()
    ctx.obj = {
        "config": mock_config,
        "console": mock_console,
        "verbose": False,
        "debug": False,
    }
    return ctx


# Pytest configuration
def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest settings."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    """Add the unit marker to tests without another marker."""
    for item in items:
        if not any(marker.name == "integration" for marker in item.iter_markers()):
            item.add_marker(pytest.mark.unit)
