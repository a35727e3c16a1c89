"""Criteria resolution and catalog query building.

The query is a plain ordered list of ``(key, value)`` pairs so it can be
compared in tests and handed to httpx unchanged. Building it has no side
effects.
"""

from __future__ import annotations

from enum import StrEnum

import structlog
from pydantic import BaseModel, ConfigDict

from discocli.core.errors import FieldNotFoundError, InvalidModeCombinationError
from discocli.core.registry import (
    DEFAULT_ARCHITECTURE,
    DEFAULT_DISTRO,
    DEFAULT_PACKAGE_TYPE,
    FieldKind,
    default_archive_type,
    default_libc_type,
    host_operating_system,
    resolve_field,
)
from discocli.core.types import (
    Architecture,
    ArchiveType,
    Distro,
    LibCType,
    OperatingSystem,
    PackageType,
    ReleaseStatus,
)
from discocli.core.version import VersionNumber

logger = structlog.get_logger()

Query = list[tuple[str, str]]

LATEST_AVAILABLE = "available"
LATEST_ALL_OF_VERSION = "all_of_version"


class Mode(StrEnum):
    """What the user asked the catalog for."""
    DOWNLOAD = "download"
    FIND = "find"
    UPDATE_CHECK = "update_check"


class Criteria(BaseModel):
    """Resolved request criteria.

    An enum field left as None means "unconstrained" and is not sent.
    """

    mode: Mode = Mode.DOWNLOAD
    distribution: Distro | None = None
    operating_system: OperatingSystem | None = None
    libc_type: LibCType | None = None
    architecture: Architecture | None = None
    package_type: PackageType | None = None
    archive_type: ArchiveType | None = None
    version: VersionNumber | None = None
    include_ea: bool = False
    javafx_bundled: bool = False
    latest: bool = False

    model_config = ConfigDict(frozen=True)


def validate_options(mode: Mode, distribution: str | None, version: str | None, latest: bool) -> None:
    """Reject contradictory option combinations before anything else runs.

    Raises:
        InvalidModeCombinationError: If the combination cannot be served
    """
    if mode is Mode.UPDATE_CHECK:
        raise InvalidModeCombinationError("Update checks use a fixed major version query")
    if latest and not version:
        raise InvalidModeCombinationError("The latest flag needs a version")
    if mode is Mode.FIND and (not distribution or not version):
        raise InvalidModeCombinationError("Finding packages needs a distribution and a version")


def parse_version(raw: str | None) -> VersionNumber | None:
    if raw is None:
        return None
    try:
        return VersionNumber.from_text(raw)
    except ValueError as e:
        raise FieldNotFoundError("version", raw) from e


def resolve_criteria(
    mode: Mode,
    *,
    distribution: str | None = None,
    version: str | None = None,
    operating_system: str | None = None,
    libc_type: str | None = None,
    architecture: str | None = None,
    package_type: str | None = None,
    archive_type: str | None = None,
    include_ea: bool = False,
    javafx_bundled: bool = False,
    latest: bool = False,
) -> Criteria:
    """Turn raw command line values into resolved criteria.

    In download mode every field ends up with a concrete value (the version
    may stay None, meaning "latest available"). In find mode fields the
    user left out stay None.

    Raises:
        InvalidModeCombinationError: If the options contradict each other
        FieldNotFoundError: If a field cannot be resolved
    """
    validate_options(mode, distribution, version, latest)
    fill = mode is not Mode.FIND

    distro = resolve_field(
        FieldKind.DISTRIBUTION,
        distribution,
        DEFAULT_DISTRO,
        substitute_default=fill,
        fallback_on_unrecognized=False,
    )
    os_value = resolve_field(
        FieldKind.OPERATING_SYSTEM,
        operating_system,
        host_operating_system(),
        substitute_default=fill,
    )
    libc_value = resolve_field(
        FieldKind.LIBC_TYPE,
        libc_type,
        default_libc_type(os_value),
        substitute_default=fill,
    )
    if libc_value is None and os_value is not None:
        libc_value = os_value.libc_type
    arch_value = resolve_field(
        FieldKind.ARCHITECTURE,
        architecture,
        DEFAULT_ARCHITECTURE,
        substitute_default=fill,
    )
    package_value = resolve_field(
        FieldKind.PACKAGE_TYPE,
        package_type,
        DEFAULT_PACKAGE_TYPE,
        substitute_default=fill,
    )
    archive_value = resolve_field(
        FieldKind.ARCHIVE_TYPE,
        archive_type,
        default_archive_type(os_value),
        substitute_default=fill,
    )

    criteria = Criteria(
        mode=mode,
        distribution=distro,
        operating_system=os_value,
        libc_type=libc_value,
        architecture=arch_value,
        package_type=package_value,
        archive_type=archive_value,
        version=parse_version(version),
        include_ea=include_ea,
        javafx_bundled=javafx_bundled,
        latest=latest,
    )
    logger.debug("criteria_resolved", **{k: str(v) for k, v in criteria.model_dump().items()})
    return criteria


def _release_status_params(include_ea: bool) -> Query:
    params: Query = []
    if include_ea:
        params.append(("release_status", ReleaseStatus.EA.value))
    params.append(("release_status", ReleaseStatus.GA.value))
    return params


def build_query(criteria: Criteria) -> Query:
    """Build the package search query for download and find requests.

    Raises:
        InvalidModeCombinationError: For update checks, which use
            :func:`build_major_version_query`
    """
    if criteria.mode is Mode.UPDATE_CHECK:
        raise InvalidModeCombinationError("Update checks use a fixed major version query")

    params: Query = []

    def add(key: str, value: StrEnum | None) -> None:
        if value is not None:
            params.append((key, value.value))

    add("distro", criteria.distribution)
    add("operating_system", criteria.operating_system)
    add("lib_c_type", criteria.libc_type)
    add("architecture", criteria.architecture)

    version = criteria.version
    if version is None:
        if criteria.mode is not Mode.FIND:
            params.append(("latest", LATEST_AVAILABLE))
    else:
        params.append(("version", version.to_string(include_build=False)))
        if criteria.latest:
            params.append(("latest", LATEST_AVAILABLE))
        elif criteria.mode is Mode.FIND and version.is_major_only:
            params.append(("latest", LATEST_ALL_OF_VERSION))

    add("archive_type", criteria.archive_type)
    if criteria.javafx_bundled:
        params.append(("javafx_bundled", "true"))
    add("package_type", criteria.package_type)
    params.append(("directlyDownloadable", "true"))
    params.extend(_release_status_params(criteria.include_ea))
    return params


def build_major_version_query(
    distribution: Distro,
    major_version: int,
    *,
    operating_system: OperatingSystem | None = None,
    libc_type: LibCType | None = None,
    architecture: Architecture | None = None,
    package_type: PackageType | None = None,
    archive_type: ArchiveType | None = None,
    include_ea: bool = False,
) -> Query:
    """Query for every build of one major version of a distribution.

    The libc type is only sent together with an operating system.
    """
    params: Query = [
        ("distro", distribution.value),
        ("version", str(major_version)),
    ]
    if operating_system is not None:
        params.append(("operating_system", operating_system.value))
        if libc_type is not None:
            params.append(("lib_c_type", libc_type.value))
    if architecture is not None:
        params.append(("architecture", architecture.value))
    if package_type is not None:
        params.append(("package_type", package_type.value))
    if archive_type is not None:
        params.append(("archive_type", archive_type.value))
    params.extend(_release_status_params(include_ea))
    params.append(("latest", LATEST_ALL_OF_VERSION))
    return params
