"""Catalog package records."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from discocli.core.registry import FieldKind, normalize_or_none
from discocli.core.types import (
    FPU,
    Architecture,
    ArchiveType,
    Bitness,
    Distro,
    LibCType,
    OperatingSystem,
    PackageType,
    ReleaseStatus,
    TermOfSupport,
    Verification,
)
from discocli.core.version import VersionNumber, term_of_support


class Pkg(BaseModel):
    """One package entry from the Disco catalog.

    Two entries are the same package when they agree on the semantic fields
    listed in :meth:`identity`; the catalog ``id`` does not take part.
    """

    id: str = Field(default="", description="Catalog id")
    ephemeral_id: str = Field(default="", description="Ephemeral id")
    distribution: Distro | None = Field(default=None, description="Distribution")
    major_version: int = Field(default=1, description="Feature version")
    java_version: VersionNumber = Field(default_factory=lambda: VersionNumber(1), description="Java version")
    distribution_version: str = Field(default="", description="Vendor specific version")
    architecture: Architecture | None = Field(default=None, description="Architecture")
    fpu: FPU = Field(default=FPU.UNKNOWN, description="Floating point ABI")
    operating_system: OperatingSystem | None = Field(default=None, description="Operating system")
    libc_type: LibCType | None = Field(default=None, description="C library")
    package_type: PackageType | None = Field(default=None, description="Package type")
    release_status: ReleaseStatus | None = Field(default=None, description="Release status")
    archive_type: ArchiveType | None = Field(default=None, description="Archive type")
    term_of_support: TermOfSupport | None = Field(default=None, description="Term of support")
    javafx_bundled: bool = Field(default=False, description="Bundled with JavaFX")
    latest_build_available: bool = Field(default=False, description="Latest build of its version")
    directly_downloadable: bool = Field(default=False, description="Has a stable direct URI")
    filename: str = Field(default="", description="Archive file name")
    size: int = Field(default=-1, description="Size in bytes, -1 when unknown")

    # Verification and licensing metadata, carried but not used for selection
    free_use_in_production: bool = Field(default=True)
    tck_tested: Verification = Field(default=Verification.UNKNOWN)
    tck_cert_uri: str = Field(default="")
    aqavit_certified: Verification = Field(default=Verification.UNKNOWN)
    aqavit_cert_uri: str = Field(default="")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Pkg:
        """Build a package from one entry of a catalog ``result`` array.

        Missing fields fall back to defaults, unknown enum tokens become None.
        """
        java_version = VersionNumber(1)
        if data.get("java_version"):
            try:
                java_version = VersionNumber.from_text(str(data["java_version"]))
            except ValueError:
                pass

        major_version = data.get("major_version")
        if major_version is None:
            major_version = java_version.feature

        size = data.get("size")
        tos = normalize_or_none(FieldKind.TERM_OF_SUPPORT, data.get("term_of_support"))
        if tos is None and major_version and int(major_version) > 0:
            tos = term_of_support(int(major_version))

        return cls(
            id=str(data.get("id") or ""),
            ephemeral_id=str(data.get("ephemeral_id") or ""),
            distribution=normalize_or_none(FieldKind.DISTRIBUTION, data.get("distribution")),
            major_version=int(major_version),
            java_version=java_version,
            distribution_version=str(data.get("distribution_version") or ""),
            architecture=normalize_or_none(FieldKind.ARCHITECTURE, data.get("architecture")),
            fpu=normalize_or_none(FieldKind.FPU, data.get("fpu")) or FPU.UNKNOWN,
            operating_system=normalize_or_none(FieldKind.OPERATING_SYSTEM, data.get("operating_system")),
            libc_type=normalize_or_none(FieldKind.LIBC_TYPE, data.get("lib_c_type")),
            package_type=normalize_or_none(FieldKind.PACKAGE_TYPE, data.get("package_type")),
            release_status=normalize_or_none(FieldKind.RELEASE_STATUS, data.get("release_status")),
            archive_type=normalize_or_none(FieldKind.ARCHIVE_TYPE, data.get("archive_type")),
            term_of_support=tos,
            javafx_bundled=bool(data.get("javafx_bundled", False)),
            latest_build_available=bool(data.get("latest_build_available", False)),
            directly_downloadable=bool(data.get("directly_downloadable", False)),
            filename=str(data.get("filename") or ""),
            size=int(size) if size is not None else -1,
            free_use_in_production=bool(data.get("free_use_in_production", True)),
            tck_tested=normalize_or_none(FieldKind.VERIFICATION, data.get("tck_tested")) or Verification.UNKNOWN,
            tck_cert_uri=str(data.get("tck_cert_uri") or ""),
            aqavit_certified=(
                normalize_or_none(FieldKind.VERIFICATION, data.get("aqavit_certified")) or Verification.UNKNOWN
            ),
            aqavit_cert_uri=str(data.get("aqavit_cert_uri") or ""),
        )

    def identity(self) -> tuple[Any, ...]:
        """Fields that define package equality."""
        return (
            self.distribution,
            self.java_version,
            self.architecture,
            self.operating_system,
            self.package_type,
            self.release_status,
            self.archive_type,
            self.term_of_support,
            self.javafx_bundled,
            self.ephemeral_id,
            self.latest_build_available,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pkg):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    @property
    def bitness(self) -> Bitness | None:
        return self.architecture.bitness if self.architecture else None

    @property
    def is_early_access(self) -> bool:
        return self.release_status is ReleaseStatus.EA

    def to_cli_string(self) -> str:
        """Command line that requests exactly this package."""
        parts = ["discocli", "download"]
        if self.distribution:
            parts += ["-d", self.distribution.value]
        parts += ["-v", self.java_version.to_string(include_build=False)]
        if self.operating_system:
            parts += ["-os", self.operating_system.value]
        if self.libc_type:
            parts += ["-lc", self.libc_type.value]
        if self.architecture:
            parts += ["-arc", self.architecture.value]
        if self.archive_type:
            parts += ["-at", self.archive_type.value]
        if self.package_type:
            parts += ["-pt", self.package_type.value]
        if self.javafx_bundled:
            parts.append("-fx")
        if self.is_early_access:
            parts.append("-ea")
        return " ".join(parts)


def dedupe(pkgs: Iterable[Pkg]) -> list[Pkg]:
    """Drop packages equal to an earlier one, keeping first-seen order."""
    seen: set[Pkg] = set()
    unique: list[Pkg] = []
    for pkg in pkgs:
        if pkg in seen:
            continue
        seen.add(pkg)
        unique.append(pkg)
    return unique
