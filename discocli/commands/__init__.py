"""CLI command implementations for discocli.

This module contains all command-line interface implementations:
- download: Download a JDK package
- find: List packages matching a distribution and version
- info: List supported distributions and values
- detect: Detect locally installed JDKs
- update: Check an installed JDK for newer builds
"""

from discocli.commands.detect import detect
from discocli.commands.download import download
from discocli.commands.find import find
from discocli.commands.info import info
from discocli.commands.update import update

__all__ = ["detect", "download", "find", "info", "update"]
