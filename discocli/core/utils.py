"""Shared utilities for discocli."""

from __future__ import annotations

from pathlib import Path, PurePosixPath, PureWindowsPath


def format_size(size: int) -> str:
    """Format byte size as human-readable string.

    Args:
        size: Size in bytes, negative when unknown

    Returns:
        Formatted string with appropriate unit (e.g., "1.5 MB")

    Example:
        >>> format_size(1024)
        '1.0 KB'
        >>> format_size(190_000_000)
        '181.2 MB'
        >>> format_size(-1)
        'unknown'
    """
    if size < 0:
        return "unknown"

    size_float = float(size)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_float < 1024.0:
            if unit == "B":
                return f"{int(size_float)} {unit}"
            return f"{size_float:.1f} {unit}"
        size_float /= 1024.0
    return f"{size_float:.1f} PB"


def target_path(directory: Path | None, filename: str) -> Path:
    """Destination of a download inside ``directory``.

    Any directory components in the catalog supplied filename are dropped.

    Raises:
        ValueError: If no usable file name remains
    """
    name = PureWindowsPath(PurePosixPath(filename).name).name
    if not name or name in (".", ".."):
        raise ValueError(f"Invalid file name: {filename!r}")
    return (directory or Path.cwd()) / name
