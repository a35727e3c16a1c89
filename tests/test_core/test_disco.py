"""Tests for disco.py module."""

import httpx
import pytest

from discocli.core.config import DiscoConfig
from discocli.core.disco import DiscoClient
from discocli.core.errors import CatalogStatusError, NoPackageFoundError, TransportError
from discocli.core.types import Distro


class TestDiscoClient:
    """Test DiscoClient class."""

    def test_default_config(self):
        client = DiscoClient()

        assert client.config.api_url == "https://api.foojay.io/disco/v3.0/"
        assert client.config.timeout == 20.0

    def test_client_created_lazily(self, disco_config):
        client = DiscoClient(disco_config)

        assert client._client is None
        assert isinstance(client.client, httpx.Client)
        client.close()
        assert client._client is None

    def test_search_packages(self, disco_client, fake_catalog):
        pkgs = disco_client.search_packages([("distro", "zulu"), ("version", "17")])

        assert len(pkgs) == 1
        assert pkgs[0].distribution is Distro.ZULU

        request = fake_catalog.requests[0]
        assert request.url.path == "/disco/v3.0/packages"
        assert request.url.params.get_list("distro") == ["zulu"]
        assert request.headers["Accept"] == "application/json"
        assert request.headers["User-Agent"].startswith("discocli/")

    def test_repeated_params_are_kept(self, disco_client, fake_catalog):
        disco_client.search_packages([("release_status", "ea"), ("release_status", "ga")])

        assert fake_catalog.requests[0].url.params.get_list("release_status") == ["ea", "ga"]

    def test_empty_result(self, disco_client, fake_catalog):
        fake_catalog.packages = []

        assert disco_client.search_packages([]) == []

    def test_bad_request_means_no_package(self, disco_client, fake_catalog):
        fake_catalog.packages_status = 400

        with pytest.raises(NoPackageFoundError):
            disco_client.search_packages([("distro", "zulu")])

    def test_server_error(self, disco_client, fake_catalog):
        fake_catalog.packages_status = 503

        with pytest.raises(CatalogStatusError) as exc_info:
            disco_client.search_packages([("distro", "zulu")])

        assert exc_info.value.status_code == 503

    def test_transport_failure(self, disco_config):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with DiscoClient(disco_config, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError) as exc_info:
                client.search_packages([])

        assert exc_info.value.url.endswith("/packages")

    def test_invalid_json(self, disco_config):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>"))

        with DiscoClient(disco_config, transport=transport) as client:
            with pytest.raises(CatalogStatusError):
                client.search_packages([])

    def test_package_info(self, disco_client, fake_catalog):
        info = disco_client.package_info("4b6d8a3b1f3a26ab56e1f8d67d0b4ea1")

        assert info["direct_download_uri"] == fake_catalog.download_url
        assert fake_catalog.requests[0].url.path == "/disco/v3.0/ids/4b6d8a3b1f3a26ab56e1f8d67d0b4ea1"

    def test_package_info_unknown_id(self, disco_client):
        assert disco_client.package_info("unknown") == {}

    def test_stream(self, disco_client, fake_catalog):
        with disco_client.stream(fake_catalog.download_url) as response:
            data = b"".join(response.iter_bytes())

        assert data == fake_catalog.downloads[fake_catalog.download_url]

    def test_stream_http_error(self, disco_client):
        with pytest.raises(httpx.HTTPStatusError):
            with disco_client.stream("https://cdn.test/missing.zip"):
                pass


class TestDiscoConfig:
    """Test DiscoConfig validation."""

    def test_trailing_slash_added(self):
        assert DiscoConfig(api_url="https://example.test/disco/v3.0").api_url == "https://example.test/disco/v3.0/"

    def test_invalid_url(self):
        with pytest.raises(ValueError):
            DiscoConfig(api_url="ftp://example.test/")

    def test_invalid_timeout(self):
        with pytest.raises(ValueError):
            DiscoConfig(timeout=0)
