"""Disco API client."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import httpx
import structlog

from discocli.core.config import DiscoConfig
from discocli.core.errors import CatalogStatusError, NoPackageFoundError, TransportError
from discocli.core.pkg import Pkg
from discocli.core.query import Query

logger = structlog.get_logger()


class DiscoClient:
    """Synchronous client for the foojay Disco API.

    Only two endpoints are used: the package search and the package detail
    lookup by id. No retries are made; a transport failure surfaces as
    :class:`TransportError`.
    """

    PACKAGES_ENDPOINT = "packages"
    IDS_ENDPOINT = "ids/"

    def __init__(
        self,
        config: DiscoConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize Disco client.

        Args:
            config: Optional API configuration
            transport: Optional httpx transport (used by tests)
        """
        self.config = config or DiscoConfig()
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
                follow_redirects=True,
                transport=self._transport,
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept": "application/json",
                },
            )
        return self._client

    def _url(self, endpoint: str) -> str:
        return f"{self.config.api_url}{endpoint}"

    def _get(self, url: str, params: Query | None = None) -> httpx.Response:
        try:
            response = self.client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("catalog_request_failed", url=url, error=str(e))
            raise TransportError("Error retrieving pkg info from Disco API", url=url) from e
        logger.debug("catalog_response", url=str(response.url), status=response.status_code)
        return response

    @staticmethod
    def _result(response: httpx.Response) -> list[dict[str, Any]]:
        try:
            body = response.json()
        except ValueError as e:
            raise CatalogStatusError(
                "Disco API returned invalid JSON",
                url=str(response.url),
                status_code=response.status_code,
            ) from e
        if not isinstance(body, dict):
            return []
        result = body.get("result") or []
        return [entry for entry in result if isinstance(entry, dict)]

    def search_packages(self, query: Query) -> list[Pkg]:
        """Query the package search endpoint.

        Args:
            query: Ordered query parameters

        Returns:
            Packages in catalog order, possibly empty

        Raises:
            NoPackageFoundError: If the catalog answers 400
            CatalogStatusError: On any other non-200 status
            TransportError: If no response was received
        """
        url = self._url(self.PACKAGES_ENDPOINT)
        logger.debug("catalog_query", url=url, params=query)
        response = self._get(url, params=query)

        if response.status_code == 400:
            raise NoPackageFoundError()
        if response.status_code != 200:
            raise CatalogStatusError(
                f"Error retrieving pkg info from Disco API with status code {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        pkgs = [Pkg.from_json(entry) for entry in self._result(response)]
        logger.debug("catalog_packages", count=len(pkgs))
        return pkgs

    def package_info(self, package_id: str) -> dict[str, Any]:
        """Fetch the detail record of a package.

        Args:
            package_id: Catalog id of the package

        Returns:
            First entry of the ``result`` array, empty dict if there is none
        """
        url = self._url(f"{self.IDS_ENDPOINT}{package_id}")
        response = self._get(url)
        if response.status_code != 200:
            raise CatalogStatusError(
                f"Error retrieving pkg info from Disco API with status code {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        result = self._result(response)
        return result[0] if result else {}

    @contextmanager
    def stream(self, url: str) -> Iterator[httpx.Response]:
        """Open a streamed GET request for a download."""
        with self.client.stream("GET", url) as response:
            response.raise_for_status()
            yield response

    def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> DiscoClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.close()
