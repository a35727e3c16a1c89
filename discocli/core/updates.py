"""Update checks for locally installed JDKs."""

from __future__ import annotations

import re
from collections.abc import Iterable

import structlog

from discocli.core.detector import FEATURES, DetectedInstallation
from discocli.core.disco import DiscoClient
from discocli.core.errors import InvalidModeCombinationError, NoPackageFoundError
from discocli.core.pkg import Pkg, dedupe
from discocli.core.query import build_major_version_query
from discocli.core.registry import DEFAULT_PACKAGE_TYPE, FieldKind, normalize_or_none, resolve_field
from discocli.core.version import VersionNumber

logger = structlog.get_logger()

_PATH_SUFFIX = re.compile(r"\s*\((?P<path>[^()]*)\)\s*$")

DESCRIPTOR_FORMAT = "distro,version,os,arch,packageType[,fx]"


def find_updates(installed: DetectedInstallation, candidates: Iterable[Pkg]) -> list[Pkg]:
    """Candidates that are newer than the installed JDK.

    Only candidates with the same JavaFX bundling are considered. An early
    access install is compared including the build number; a GA install is
    compared without it, so a rebuild of the same version is no update.

    Args:
        installed: The local installation
        candidates: Catalog packages of the same major version

    Returns:
        Matching candidates in input order
    """
    installed_version = installed.version
    matching_fx = [p for p in candidates if p.javafx_bundled == installed.javafx_bundled]

    if installed_version.is_early_access:
        return [p for p in matching_fx if p.java_version.sort_key() > installed_version.sort_key()]
    return [p for p in matching_fx if p.java_version.reduced_key() > installed_version.reduced_key()]


def parse_update_descriptor(descriptor: str) -> DetectedInstallation:
    """Parse ``distro,version,os,arch,packageType[,fx]``.

    A leading ``*`` marks the installation as in use, a trailing
    ``(path)`` carries the install folder and further tokens name
    feature flags, matching the output of ``discocli detect``.

    Raises:
        InvalidModeCombinationError: If the descriptor is malformed
    """
    text = (descriptor or "").strip()
    in_use = text.startswith("*")
    if in_use:
        text = text[1:].strip()

    path = ""
    match = _PATH_SUFFIX.search(text)
    if match:
        path = match.group("path").strip()
        text = text[: match.start()]

    tokens = [t.strip() for t in text.split(",")]
    if len(tokens) < 5 or not all(tokens[:5]):
        raise InvalidModeCombinationError(
            f"Malformed update descriptor {descriptor!r}, expected {DESCRIPTOR_FORMAT}"
        )

    distribution, raw_version, operating_system, architecture, package_type = tokens[:5]
    try:
        version = VersionNumber.from_text(raw_version)
    except ValueError as e:
        raise InvalidModeCombinationError(f"Malformed version in update descriptor: {raw_version!r}") from e

    javafx_bundled = False
    feature = ""
    for token in tokens[5:]:
        if token == "fx":
            javafx_bundled = True
        elif token in FEATURES:
            feature = token
        elif token:
            raise InvalidModeCombinationError(f"Unknown token {token!r} in update descriptor")

    return DetectedInstallation(
        distribution=distribution,
        version=version,
        operating_system=operating_system,
        architecture=architecture,
        package_type=package_type,
        javafx_bundled=javafx_bundled,
        feature=feature,
        in_use=in_use,
        path=path,
    )


def check_for_updates(client: DiscoClient, installed: DetectedInstallation) -> list[Pkg]:
    """Ask the catalog for newer builds of the installed major version.

    Raises:
        FieldNotFoundError: If the distribution is unknown to the catalog
    """
    distribution = resolve_field(FieldKind.DISTRIBUTION, installed.distribution, fallback_on_unrecognized=False)
    operating_system = normalize_or_none(FieldKind.OPERATING_SYSTEM, installed.operating_system)
    package_type = normalize_or_none(FieldKind.PACKAGE_TYPE, installed.package_type) or DEFAULT_PACKAGE_TYPE

    query = build_major_version_query(
        distribution,
        installed.version.feature,
        operating_system=operating_system,
        libc_type=operating_system.libc_type if operating_system else None,
        architecture=normalize_or_none(FieldKind.ARCHITECTURE, installed.architecture),
        package_type=package_type,
        include_ea=installed.version.is_early_access,
    )
    try:
        candidates = client.search_packages(query)
    except NoPackageFoundError:
        candidates = []

    updates = find_updates(installed, dedupe(candidates))
    logger.info(
        "update_check_complete",
        distribution=distribution.value,
        installed=str(installed.version),
        updates=len(updates),
    )
    return updates
