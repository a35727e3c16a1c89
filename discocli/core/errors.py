"""Error types raised while resolving and downloading packages.

All of them derive from :class:`DiscoError` so the command layer can map
any resolution, transport or download failure to exit code 1 with a single
``except`` clause.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from discocli.core.pkg import Pkg


class DiscoError(Exception):
    """Base class for discocli errors."""


class FieldNotFoundError(DiscoError):
    """Raised when user input does not name a known value and no default applies.

    Attributes:
        kind: Field kind that failed to resolve (e.g. ``"distribution"``)
        raw: The text the user supplied, if any
    """

    def __init__(self, kind: str, raw: str | None = None):
        self.kind = kind
        self.raw = raw
        label = kind.replace("_", " ").capitalize()
        if raw is None:
            message = f"{label} cannot be found"
        else:
            message = f"{label} cannot be found: {raw!r}"
        super().__init__(message)


class InvalidModeCombinationError(DiscoError):
    """Raised when options contradict each other (e.g. ``--latest`` without a version)."""


class TransportError(DiscoError):
    """Raised when the catalog API could not be reached.

    Attributes:
        url: Requested URL
    """

    def __init__(self, message: str, *, url: str | None = None):
        self.url = url
        super().__init__(message)


class CatalogStatusError(DiscoError):
    """Raised when the catalog answers with an unexpected HTTP status.

    Attributes:
        url: Requested URL
        status_code: HTTP status returned by the catalog
    """

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class NoPackageFoundError(DiscoError):
    """Raised when the catalog has no package matching the request.

    Attributes:
        alternatives: Packages of the same major version, for display only
    """

    def __init__(
        self,
        message: str = "Sorry, defined pkg not found in Disco API",
        *,
        alternatives: Iterable[Pkg] | None = None,
    ):
        self.alternatives = list(alternatives or [])
        super().__init__(message)


class MissingDownloadInfoError(DiscoError):
    """Raised when the package detail lacks a direct download URI.

    Attributes:
        package_id: Catalog id of the package
    """

    def __init__(self, package_id: str):
        self.package_id = package_id
        super().__init__(f"Error retrieving direct download uri for package {package_id}")


class DownloadFailedError(DiscoError):
    """Raised when streaming a package to disk fails.

    Attributes:
        filename: Target file name
        uri: Source URI
    """

    def __init__(self, filename: str, uri: str):
        self.filename = filename
        self.uri = uri
        super().__init__(f"Error downloading {filename} from {uri}")
