"""Tests for utils.py module."""

from pathlib import Path

import pytest

from discocli.core.utils import format_size, target_path


class TestFormatSize:
    """Test format_size()."""

    def test_bytes(self):
        assert format_size(0) == "0 B"
        assert format_size(512) == "512 B"

    def test_larger_units(self):
        assert format_size(1024) == "1.0 KB"
        assert format_size(1536) == "1.5 KB"
        assert format_size(1048576) == "1.0 MB"
        assert format_size(1024 ** 3) == "1.0 GB"

    def test_unknown_size(self):
        assert format_size(-1) == "unknown"


class TestTargetPath:
    """Test target_path()."""

    def test_joins_directory(self, temp_dir):
        assert target_path(temp_dir, "jdk.tar.gz") == temp_dir / "jdk.tar.gz"

    def test_defaults_to_cwd(self):
        assert target_path(None, "jdk.zip") == Path.cwd() / "jdk.zip"

    @pytest.mark.parametrize("filename", ["../../etc/passwd", "sub/dir/passwd", "..\\..\\passwd"])
    def test_strips_directories(self, temp_dir, filename):
        assert target_path(temp_dir, filename) == temp_dir / "passwd"

    @pytest.mark.parametrize("filename", ["", "..", "a/.."])
    def test_invalid_names(self, temp_dir, filename):
        with pytest.raises(ValueError):
            target_path(temp_dir, filename)
