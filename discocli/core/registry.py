"""Normalization of free-text input into canonical catalog values.

``normalize`` answers in three states:

* ``None``: the user did not supply the field
* a canonical enum member: the text matched a synonym exactly
* :class:`Unrecognized`: the text matched nothing
"""

from __future__ import annotations

import platform
from enum import StrEnum
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from discocli.core.errors import FieldNotFoundError
from discocli.core.types import (
    ARCHITECTURE_SYNONYMS,
    ARCHIVE_TYPE_SYNONYMS,
    DISTRO_SYNONYMS,
    FPU_SYNONYMS,
    LIBC_TYPE_SYNONYMS,
    OS_SYNONYMS,
    PACKAGE_TYPE_SYNONYMS,
    RELEASE_STATUS_SYNONYMS,
    TERM_OF_SUPPORT_SYNONYMS,
    VERIFICATION_SYNONYMS,
    Architecture,
    ArchiveType,
    Distro,
    LibCType,
    OperatingSystem,
    PackageType,
)

logger = structlog.get_logger()


class FieldKind(StrEnum):
    """Kinds of enumerated fields accepted from the command line or catalog."""
    DISTRIBUTION = "distribution"
    OPERATING_SYSTEM = "operating_system"
    ARCHITECTURE = "architecture"
    ARCHIVE_TYPE = "archive_type"
    PACKAGE_TYPE = "package_type"
    LIBC_TYPE = "libc_type"
    RELEASE_STATUS = "release_status"
    TERM_OF_SUPPORT = "term_of_support"
    FPU = "fpu"
    VERIFICATION = "verification"


class Unrecognized(BaseModel):
    """Marker for text that did not match any synonym."""

    raw: str

    model_config = ConfigDict(frozen=True)


def _invert(table: dict[Any, tuple[str, ...]]) -> dict[str, Any]:
    lookup: dict[str, Any] = {}
    for value, synonyms in table.items():
        # The API token itself is always accepted
        lookup.setdefault(value.value, value)
        for synonym in synonyms:
            lookup.setdefault(synonym, value)
    return lookup


_LOOKUPS: dict[FieldKind, dict[str, Any]] = {
    FieldKind.DISTRIBUTION: _invert(DISTRO_SYNONYMS),
    FieldKind.OPERATING_SYSTEM: _invert(OS_SYNONYMS),
    FieldKind.ARCHITECTURE: _invert(ARCHITECTURE_SYNONYMS),
    FieldKind.ARCHIVE_TYPE: _invert(ARCHIVE_TYPE_SYNONYMS),
    FieldKind.PACKAGE_TYPE: _invert(PACKAGE_TYPE_SYNONYMS),
    FieldKind.LIBC_TYPE: _invert(LIBC_TYPE_SYNONYMS),
    FieldKind.RELEASE_STATUS: _invert(RELEASE_STATUS_SYNONYMS),
    FieldKind.TERM_OF_SUPPORT: _invert(TERM_OF_SUPPORT_SYNONYMS),
    FieldKind.FPU: _invert(FPU_SYNONYMS),
    FieldKind.VERIFICATION: _invert(VERIFICATION_SYNONYMS),
}


def normalize(kind: FieldKind, text: str | None) -> Any:
    """Map free text to a canonical value.

    Matching is case-sensitive and exact against the synonym table of
    ``kind``; every accepted spelling is listed explicitly.

    Args:
        kind: Field kind to normalize for
        text: User or catalog supplied text, or None

    Returns:
        None if text is None, the matching enum member, or
        :class:`Unrecognized` carrying the raw text
    """
    if text is None:
        return None
    value = _LOOKUPS[kind].get(text)
    if value is None:
        return Unrecognized(raw=text)
    return value


def normalize_or_none(kind: FieldKind, text: str | None) -> Any:
    """Like :func:`normalize` but folds unrecognized text into None."""
    value = normalize(kind, text)
    return None if isinstance(value, Unrecognized) else value


def is_valid(value: Any) -> bool:
    return value is not None and not isinstance(value, Unrecognized)


# ──────────────────────────────────────────────
#  Defaults
# ──────────────────────────────────────────────

DEFAULT_DISTRO = Distro.ZULU
DEFAULT_ARCHITECTURE = Architecture.X64
DEFAULT_PACKAGE_TYPE = PackageType.JDK

_PLATFORM_SYSTEMS: dict[str, OperatingSystem] = {
    "Linux": OperatingSystem.LINUX,
    "Darwin": OperatingSystem.MACOS,
    "Windows": OperatingSystem.WINDOWS,
    "AIX": OperatingSystem.AIX,
    "SunOS": OperatingSystem.SOLARIS,
    "QNX": OperatingSystem.QNX,
}


def host_operating_system() -> OperatingSystem | None:
    """Operating system of the running host, None when unknown."""
    system = _PLATFORM_SYSTEMS.get(platform.system())
    if system is OperatingSystem.LINUX and _is_alpine():
        return OperatingSystem.ALPINE_LINUX
    return system


def _is_alpine() -> bool:
    try:
        with open("/etc/os-release") as f:
            return any(line.strip() in ("ID=alpine", 'ID="alpine"') for line in f)
    except OSError:
        return False


def host_architecture() -> Architecture | None:
    """Architecture of the running host, None when unknown."""
    return normalize_or_none(FieldKind.ARCHITECTURE, platform.machine())


def default_archive_type(operating_system: OperatingSystem | None) -> ArchiveType:
    """ZIP on Windows, TAR_GZ everywhere else."""
    if operating_system is OperatingSystem.WINDOWS:
        return ArchiveType.ZIP
    return ArchiveType.TAR_GZ


def default_libc_type(operating_system: OperatingSystem | None) -> LibCType | None:
    if operating_system is None:
        return None
    return operating_system.libc_type


def resolve_field(
    kind: FieldKind,
    raw: str | None,
    default: Any = None,
    *,
    substitute_default: bool = True,
    fallback_on_unrecognized: bool = True,
) -> Any:
    """Resolve one criteria field.

    The user value wins when it normalizes. Otherwise the context default is
    used, unless ``substitute_default`` is False (find mode), in which case
    an unspecified field stays None.

    Args:
        kind: Field kind
        raw: User supplied text or None
        default: Context default for this field
        substitute_default: Replace missing values with ``default``
        fallback_on_unrecognized: Replace unrecognized text with ``default``
            instead of failing

    Returns:
        The canonical value, or None for an unconstrained field

    Raises:
        FieldNotFoundError: If the value is unrecognized and no default applies
    """
    value = normalize(kind, raw)

    if isinstance(value, Unrecognized):
        if substitute_default and fallback_on_unrecognized and default is not None:
            logger.debug("field_default_substituted", field=kind.value, raw=raw, default=str(default))
            return default
        raise FieldNotFoundError(kind.value, raw)

    if value is None:
        if not substitute_default:
            return None
        if default is None:
            raise FieldNotFoundError(kind.value)
        return default

    return value
