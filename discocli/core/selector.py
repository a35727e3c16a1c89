"""Selection of packages from catalog search results."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

import structlog
from pydantic import BaseModel

from discocli.core.disco import DiscoClient
from discocli.core.errors import (
    CatalogStatusError,
    MissingDownloadInfoError,
    NoPackageFoundError,
    TransportError,
)
from discocli.core.pkg import Pkg, dedupe
from discocli.core.query import Criteria, Mode, build_major_version_query, build_query

logger = structlog.get_logger()


class DownloadInfo(BaseModel):
    """Direct download location of a resolved package."""

    filename: str
    direct_download_uri: str


def _enum_key(value: Enum | None) -> str:
    # Unknown values sort last
    return value.value if value is not None else "\uffff"


def sort_for_download(pkgs: Iterable[Pkg]) -> list[Pkg]:
    """Highest java version first; ties keep their input order."""
    return sorted(pkgs, key=lambda p: p.java_version, reverse=True)


def sort_for_find(pkgs: Iterable[Pkg]) -> list[Pkg]:
    """Order by OS, java version (descending), architecture, archive type and package type."""
    # Stable sorts applied from the least to the most significant key
    ordered = sorted(pkgs, key=lambda p: _enum_key(p.package_type))
    ordered.sort(key=lambda p: _enum_key(p.archive_type))
    ordered.sort(key=lambda p: _enum_key(p.architecture))
    ordered.sort(key=lambda p: p.java_version, reverse=True)
    ordered.sort(key=lambda p: _enum_key(p.operating_system))
    return ordered


def select(mode: Mode, candidates: Iterable[Pkg]) -> Pkg | list[Pkg]:
    """Pick the package(s) to act on.

    Args:
        mode: DOWNLOAD returns a single package, FIND the ranked list
        candidates: Raw catalog results

    Raises:
        NoPackageFoundError: If no candidate remains after de-duplication
    """
    pkgs = dedupe(candidates)
    if not pkgs:
        raise NoPackageFoundError()

    if mode is Mode.DOWNLOAD:
        selected = sort_for_download(pkgs)[0]
        logger.debug("package_selected", id=selected.id, java_version=str(selected.java_version))
        return selected
    if mode is Mode.FIND:
        return sort_for_find(pkgs)
    raise ValueError(f"Selection is not defined for mode {mode}")


def resolve_download_info(client: DiscoClient, pkg: Pkg) -> DownloadInfo:
    """Look up the direct download URI of a package.

    Raises:
        MissingDownloadInfoError: If the detail record has no direct download URI
    """
    info = client.package_info(pkg.id)
    uri = str(info.get("direct_download_uri") or "")
    if not uri:
        raise MissingDownloadInfoError(pkg.id)
    filename = str(info.get("filename") or pkg.filename)
    return DownloadInfo(filename=filename, direct_download_uri=uri)


def fallback_packages(client: DiscoClient, criteria: Criteria) -> list[Pkg]:
    """Packages of the requested major version, shown when nothing matched.

    Only used for display; failures here yield an empty list.
    """
    if criteria.version is None or criteria.distribution is None:
        return []

    query = build_major_version_query(
        criteria.distribution,
        criteria.version.feature,
        operating_system=criteria.operating_system,
        libc_type=criteria.libc_type,
        architecture=criteria.architecture,
        package_type=criteria.package_type,
        archive_type=criteria.archive_type,
        include_ea=criteria.include_ea,
    )
    try:
        pkgs = client.search_packages(query)
    except (NoPackageFoundError, CatalogStatusError, TransportError) as e:
        logger.debug("fallback_query_failed", error=str(e))
        return []
    return sort_for_download(dedupe(pkgs))


def resolve(client: DiscoClient, criteria: Criteria) -> Pkg | list[Pkg]:
    """Run the search for the criteria and select from the result.

    On a 400 answer or an empty result a broader query for the same major
    version is made and attached to the raised error for display.

    Raises:
        NoPackageFoundError: With ``alternatives`` filled when available
    """
    try:
        candidates = client.search_packages(build_query(criteria))
        return select(criteria.mode, candidates)
    except NoPackageFoundError as e:
        alternatives = fallback_packages(client, criteria)
        raise NoPackageFoundError(str(e), alternatives=alternatives) from e
