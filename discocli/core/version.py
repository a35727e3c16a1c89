"""Java version numbers and term-of-support rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from discocli.core.types import ReleaseStatus, TermOfSupport

_VERSION_PATTERN = re.compile(
    r"^(?:jdk-?)?"
    r"(?P<feature>\d+)"
    r"(?:\.(?P<interim>\d+))?"
    r"(?:\.(?P<update>\d+))?"
    r"(?:\.(?P<patch>\d+))?"
    r"(?:\.\d+)*"
    r"(?:_(?P<legacy_update>\d+))?"
    r"(?P<pre>-ea)?"
    r"(?:(?:\+b?|-b?)(?P<build>\d+))?",
    re.IGNORECASE,
)


@total_ordering
@dataclass(frozen=True, eq=False)
class VersionNumber:
    """Java version number.

    The primary ordering is lexicographic over (feature, interim, update,
    patch). Release status (EA sorts before GA) and build number only break
    ties.
    """

    feature: int
    interim: int = 0
    update: int = 0
    patch: int = 0
    build: int | None = None
    release_status: ReleaseStatus = ReleaseStatus.GA

    def __post_init__(self) -> None:
        for part in (self.feature, self.interim, self.update, self.patch):
            if part < 0:
                raise ValueError("Version components must be non-negative")
        if self.build is not None and self.build < 0:
            raise ValueError("Build number must be non-negative")

    @classmethod
    def from_text(cls, text: str) -> VersionNumber:
        """Parse a version string.

        Accepts modern (``17.0.2+8``, ``18-ea+5``, ``21.0.1+12-LTS``) and
        legacy (``1.8.0_322-b06``) formats, optionally prefixed with ``jdk-``.

        Raises:
            ValueError: If text does not start with a version number
        """
        if text is None:
            raise ValueError("Version text cannot be None")
        cleaned = text.strip().strip('"').strip()
        match = _VERSION_PATTERN.match(cleaned)
        if not match:
            raise ValueError(f"Invalid version number: {text!r}")

        feature = int(match.group("feature"))
        interim = int(match.group("interim") or 0)
        update = int(match.group("update") or 0)
        patch = int(match.group("patch") or 0)
        legacy_update = match.group("legacy_update")

        # 1.8.0_322 -> 8.0.322
        if feature == 1 and match.group("interim") is not None and interim > 1:
            feature, interim, update, patch = interim, 0, int(legacy_update or update), 0
        elif legacy_update is not None:
            update = int(legacy_update)

        build = match.group("build")
        return cls(
            feature=feature,
            interim=interim,
            update=update,
            patch=patch,
            build=int(build) if build is not None else None,
            release_status=ReleaseStatus.EA if match.group("pre") else ReleaseStatus.GA,
        )

    @property
    def is_major_only(self) -> bool:
        return self.interim == 0 and self.update == 0 and self.patch == 0

    @property
    def is_early_access(self) -> bool:
        return self.release_status is ReleaseStatus.EA

    def reduced(self) -> VersionNumber:
        """Return a copy without build number."""
        return VersionNumber(self.feature, self.interim, self.update, self.patch, None, self.release_status)

    def _numbers(self) -> tuple[int, int, int, int]:
        return (self.feature, self.interim, self.update, self.patch)

    def sort_key(self) -> tuple[int, int, int, int, int, int]:
        ga_rank = 1 if self.release_status is ReleaseStatus.GA else 0
        return (*self._numbers(), ga_rank, self.build or 0)

    def reduced_key(self) -> tuple[int, int, int, int, int]:
        ga_rank = 1 if self.release_status is ReleaseStatus.GA else 0
        return (*self._numbers(), ga_rank)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionNumber):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: VersionNumber) -> bool:
        if not isinstance(other, VersionNumber):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())

    def to_string(
        self,
        compressed: bool = True,
        include_release_status: bool = True,
        include_build: bool = True,
    ) -> str:
        """Render the version.

        Args:
            compressed: Drop trailing zero components (``17.0.0`` -> ``17``)
            include_release_status: Append ``-ea`` for early access builds
            include_build: Append ``+<build>`` when a build number is known
        """
        parts = list(self._numbers())
        if compressed:
            while len(parts) > 1 and parts[-1] == 0:
                parts.pop()
        text = ".".join(str(p) for p in parts)
        if include_release_status and self.is_early_access:
            text += "-ea"
        if include_build and self.build is not None:
            text += f"+{self.build}"
        return text

    def __str__(self) -> str:
        return self.to_string()


def is_lts(feature_version: int) -> bool:
    """Long term support: 1-8, then every sixth release from 11."""
    if feature_version < 1:
        raise ValueError("Feature version number cannot be smaller than 1")
    if feature_version <= 8:
        return True
    if feature_version < 11:
        return False
    return (feature_version - 11) % 6 == 0


def is_mts(feature_version: int) -> bool:
    if feature_version < 13:
        return False
    return not is_lts(feature_version) and feature_version % 2 != 0


def is_sts(feature_version: int) -> bool:
    if feature_version < 9:
        return False
    if feature_version in (9, 10):
        return True
    return not is_lts(feature_version)


def term_of_support(feature_version: int) -> TermOfSupport:
    """Derive the term of support of a feature release."""
    if is_lts(feature_version):
        return TermOfSupport.LTS
    if is_mts(feature_version):
        return TermOfSupport.MTS
    return TermOfSupport.STS
