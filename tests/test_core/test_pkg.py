"""Tests for pkg.py module."""

from discocli.core.pkg import Pkg, dedupe
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
)
from discocli.core.version import VersionNumber


class TestPkgFromJson:
    """Test Pkg.from_json."""

    def test_full_entry(self, make_entry):
        pkg = Pkg.from_json(make_entry())

        assert pkg.id == "4b6d8a3b1f3a26ab56e1f8d67d0b4ea1"
        assert pkg.distribution is Distro.ZULU
        assert pkg.java_version == VersionNumber(17, 0, 2, build=8)
        assert pkg.major_version == 17
        assert pkg.operating_system is OperatingSystem.LINUX
        assert pkg.libc_type is LibCType.GLIBC
        assert pkg.architecture is Architecture.X64
        assert pkg.archive_type is ArchiveType.TAR_GZ
        assert pkg.package_type is PackageType.JDK
        assert pkg.release_status is ReleaseStatus.GA
        assert pkg.term_of_support is TermOfSupport.LTS
        assert pkg.fpu is FPU.UNKNOWN
        assert pkg.size == 190_000_000
        assert pkg.bitness is Bitness.BIT_64
        assert not pkg.is_early_access

    def test_missing_fields_use_defaults(self):
        pkg = Pkg.from_json({"java_version": "11.0.14"})

        assert pkg.distribution is None
        assert pkg.major_version == 11
        assert pkg.size == -1
        assert pkg.filename == ""
        assert pkg.term_of_support is TermOfSupport.LTS

    def test_unknown_tokens_become_none(self, make_entry):
        pkg = Pkg.from_json(make_entry(operating_system="beos", archive_type="sit"))

        assert pkg.operating_system is None
        assert pkg.archive_type is None

    def test_term_of_support_derived_when_missing(self, make_entry):
        entry = make_entry(java_version="19.0.2+7", major_version=19)
        del entry["term_of_support"]

        assert Pkg.from_json(entry).term_of_support is TermOfSupport.MTS

    def test_invalid_java_version(self):
        pkg = Pkg.from_json({"java_version": "unknown"})

        assert pkg.java_version == VersionNumber(1)


class TestPkgEquality:
    """Test semantic equality of packages."""

    def test_catalog_id_is_ignored(self, make_pkg):
        assert make_pkg(id="a") == make_pkg(id="b")
        assert hash(make_pkg(id="a")) == hash(make_pkg(id="b"))

    def test_filename_and_size_are_ignored(self, make_pkg):
        assert make_pkg(filename="a.tar.gz", size=1) == make_pkg(filename="b.tar.gz", size=2)

    def test_semantic_fields_count(self, make_pkg):
        assert make_pkg() != make_pkg(java_version="17.0.1+12")
        assert make_pkg() != make_pkg(architecture="aarch64")
        assert make_pkg() != make_pkg(javafx_bundled=True)
        assert make_pkg() != make_pkg(ephemeral_id="other")
        assert make_pkg() != make_pkg(latest_build_available=False)


class TestDedupe:
    """Test dedupe()."""

    def test_keeps_first_seen_order(self, make_pkg):
        a = make_pkg(id="a", java_version="17.0.1+12")
        b = make_pkg(id="b")
        c = make_pkg(id="c", java_version="17.0.1+12")

        result = dedupe([a, b, c])

        assert [p.id for p in result] == ["a", "b"]

    def test_idempotent(self, make_pkg):
        pkgs = [make_pkg(id="a"), make_pkg(id="b"), make_pkg(id="c", architecture="aarch64")]

        once = dedupe(pkgs)

        assert dedupe(once) == once
        assert len(once) == 2

    def test_empty(self):
        assert dedupe([]) == []


class TestToCliString:
    """Test Pkg.to_cli_string."""

    def test_ga_package(self, make_pkg):
        assert make_pkg().to_cli_string() == (
            "discocli download -d zulu -v 17.0.2 -os linux -lc glibc -arc x64 -at tar.gz -pt jdk"
        )

    def test_ea_fx_package(self, make_pkg):
        pkg = make_pkg(java_version="18-ea+5", release_status="ea", javafx_bundled=True)

        assert pkg.to_cli_string().endswith("-pt jdk -fx -ea")
        assert "-v 18-ea " in pkg.to_cli_string()
