"""Core functionality for discocli.

This module provides shared functionality used by the commands:
- Configuration management
- Canonical value types and normalization
- Disco API client and query building
- Package selection, downloads and update checks
"""

from discocli.core.errors import DiscoError
from discocli.core.pkg import Pkg
from discocli.core.types import (
    Architecture,
    ArchiveType,
    Distro,
    OperatingSystem,
    PackageType,
)
from discocli.core.utils import format_size
from discocli.core.version import VersionNumber

__all__ = [
    # Types
    "Architecture",
    "ArchiveType",
    "Distro",
    "OperatingSystem",
    "PackageType",
    "Pkg",
    "VersionNumber",
    # Errors
    "DiscoError",
    # Utils
    "format_size",
]
