"""discocli - find and download JDK packages from the foojay Disco API.

Key modules:
- core: Shared functionality (config, types, catalog client, selection)
- commands: CLI command implementations
"""

__version__ = "0.1.0"
__author__ = "discocli contributors"

# Re-export commonly used types
from discocli.core.types import Distro, OperatingSystem  # noqa: E402
from discocli.core.version import VersionNumber  # noqa: E402

__all__ = [
    "__version__",
    "__author__",
    "Distro",
    "OperatingSystem",
    "VersionNumber",
]
