"""Tests for selector.py module."""

from unittest.mock import Mock

import pytest

from discocli.core.errors import MissingDownloadInfoError, NoPackageFoundError
from discocli.core.query import Criteria, Mode
from discocli.core.selector import (
    fallback_packages,
    resolve,
    resolve_download_info,
    select,
    sort_for_download,
    sort_for_find,
)
from discocli.core.types import Architecture, Distro, OperatingSystem
from discocli.core.version import VersionNumber


class TestSelect:
    """Test select()."""

    def test_download_picks_highest_version_after_dedupe(self, make_pkg):
        older = make_pkg(id="a", java_version="17.0.1+12")
        newer = make_pkg(id="b", java_version="17.0.2+8")
        newer_duplicate = make_pkg(id="c", java_version="17.0.2+8")

        selected = select(Mode.DOWNLOAD, [older, newer, newer_duplicate])

        assert selected.id == "b"
        assert selected.java_version == VersionNumber(17, 0, 2, build=8)

    def test_download_sort_is_single_key_and_stable(self, make_pkg):
        # Ties on java_version keep catalog order, other fields do not matter
        first = make_pkg(id="first", architecture="aarch64")
        second = make_pkg(id="second", architecture="x64")

        assert select(Mode.DOWNLOAD, [first, second]).id == "first"

    def test_empty_result(self):
        with pytest.raises(NoPackageFoundError):
            select(Mode.DOWNLOAD, [])

    def test_find_returns_full_ordered_list(self, make_pkg):
        pkgs = [
            make_pkg(id="mac", operating_system="macos"),
            make_pkg(id="linux-old", java_version="17.0.1+12"),
            make_pkg(id="linux-arm", architecture="aarch64"),
            make_pkg(id="linux-x64"),
        ]

        result = select(Mode.FIND, pkgs)

        assert [p.id for p in result] == ["linux-arm", "linux-x64", "linux-old", "mac"]

    def test_update_check_has_no_selection(self, make_pkg):
        with pytest.raises(ValueError):
            select(Mode.UPDATE_CHECK, [make_pkg()])


class TestSorting:
    """Test sort helpers."""

    def test_sort_for_download_descending(self, make_pkg):
        pkgs = [make_pkg(id=v, java_version=v) for v in ("11.0.2", "17.0.2", "17.0.10")]

        assert [p.id for p in sort_for_download(pkgs)] == ["17.0.10", "17.0.2", "11.0.2"]

    def test_sort_for_find_unknown_values_last(self, make_pkg):
        pkgs = [make_pkg(id="unknown", operating_system="beos"), make_pkg(id="linux")]

        assert [p.id for p in sort_for_find(pkgs)] == ["linux", "unknown"]


class TestResolveDownloadInfo:
    """Test resolve_download_info()."""

    def test_detail_lookup(self, disco_client, fake_catalog, make_pkg):
        info = resolve_download_info(disco_client, make_pkg())

        assert info.direct_download_uri == fake_catalog.download_url
        assert info.filename == "zulu17.32.13-ca-jdk17.0.2-linux_x64.tar.gz"

    def test_missing_uri(self, make_pkg):
        client = Mock()
        client.package_info.return_value = {"filename": "x.zip", "direct_download_uri": ""}

        with pytest.raises(MissingDownloadInfoError):
            resolve_download_info(client, make_pkg())

    def test_filename_falls_back_to_package(self, make_pkg):
        client = Mock()
        client.package_info.return_value = {"direct_download_uri": "https://cdn.test/x.tar.gz"}

        assert resolve_download_info(client, make_pkg(filename="pkg.tar.gz")).filename == "pkg.tar.gz"


class TestResolve:
    """Test resolve() and the fallback query."""

    @pytest.fixture
    def criteria(self):
        return Criteria(
            mode=Mode.DOWNLOAD,
            distribution=Distro.ZULU,
            operating_system=OperatingSystem.LINUX,
            architecture=Architecture.X64,
            version=VersionNumber.from_text("17.0.99"),
        )

    def test_resolve_download(self, disco_client, criteria):
        pkg = resolve(disco_client, criteria)

        assert pkg.distribution is Distro.ZULU

    def test_no_match_runs_fallback_query(self, criteria, make_pkg):
        client = Mock()
        client.search_packages.side_effect = [
            [],
            [make_pkg(java_version="17.0.1+12"), make_pkg(), make_pkg(id="dup")],
        ]

        with pytest.raises(NoPackageFoundError) as exc_info:
            resolve(client, criteria)

        alternatives = exc_info.value.alternatives
        assert [str(p.java_version) for p in alternatives] == ["17.0.2+8", "17.0.1+12"]
        fallback_query = client.search_packages.call_args_list[1].args[0]
        assert ("version", "17") in fallback_query
        assert ("lib_c_type", "glibc") not in fallback_query
        assert fallback_query[-1] == ("latest", "all_of_version")

    def test_bad_request_runs_fallback(self, disco_client, fake_catalog, criteria):
        fake_catalog.packages_status = 400

        with pytest.raises(NoPackageFoundError) as exc_info:
            resolve(disco_client, criteria)

        assert exc_info.value.alternatives == []
        assert len(fake_catalog.search_requests()) == 2

    def test_fallback_needs_version(self, disco_client, fake_catalog):
        criteria = Criteria(mode=Mode.DOWNLOAD, distribution=Distro.ZULU)

        assert fallback_packages(disco_client, criteria) == []
        assert fake_catalog.requests == []


class TestNoPackageFoundError:
    """Test NoPackageFoundError."""

    def test_alternatives_are_materialized(self, make_pkg):
        pkgs = [make_pkg(), make_pkg(java_version="17.0.1+12")]

        error = NoPackageFoundError(alternatives=(p for p in pkgs))

        assert error.alternatives == pkgs
        assert str(error) == "Sorry, defined pkg not found in Disco API"

    def test_no_alternatives(self):
        assert NoPackageFoundError("nothing").alternatives == []
