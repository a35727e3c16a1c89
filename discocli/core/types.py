"""Core type definitions for discocli.

Every catalog field with a closed set of values is a ``StrEnum`` whose value
is the token the Disco API expects. Free-text input is matched against
explicit synonym tables (case-sensitive, no fuzzy matching), built once at
import time.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Bitness(StrEnum):
    """Address width of an architecture."""
    BIT_32 = "32"
    BIT_64 = "64"


class LibCType(StrEnum):
    """C standard library a native build links against."""
    GLIBC = "glibc"
    LIBC = "libc"
    MUSL = "musl"
    C_STD_LIB = "c_std_lib"

    @property
    def label(self) -> str:
        return _LIBC_LABELS[self]


class OperatingSystem(StrEnum):
    """Operating systems known to the catalog."""
    AIX = "aix"
    ALPINE_LINUX = "alpine_linux"
    LINUX = "linux"
    LINUX_MUSL = "linux_musl"
    MACOS = "macos"
    QNX = "qnx"
    SOLARIS = "solaris"
    WINDOWS = "windows"

    @property
    def label(self) -> str:
        return _OS_LABELS[self]

    @property
    def libc_type(self) -> LibCType:
        """The libc family builds for this OS link against."""
        return _OS_LIBC[self]


class Architecture(StrEnum):
    """CPU architectures known to the catalog."""
    AARCH32 = "aarch32"
    AARCH64 = "aarch64"
    AMD64 = "amd64"
    ARM = "arm"
    ARM64 = "arm64"
    MIPS = "mips"
    PPC = "ppc"
    PPC64 = "ppc64"
    PPC64LE = "ppc64le"
    RISCV64 = "riscv64"
    S390X = "s390x"
    SPARC = "sparc"
    SPARCV9 = "sparcv9"
    X64 = "x64"
    X86 = "x86"
    I386 = "i386"
    I586 = "i586"
    I686 = "i686"

    @property
    def label(self) -> str:
        return self.value.upper()

    @property
    def bitness(self) -> Bitness:
        if self in _ARCH_32_BIT:
            return Bitness.BIT_32
        return Bitness.BIT_64


class ArchiveType(StrEnum):
    """Archive/installer formats."""
    APK = "apk"
    CAB = "cab"
    DEB = "deb"
    DMG = "dmg"
    EXE = "exe"
    MSI = "msi"
    PKG = "pkg"
    RPM = "rpm"
    SRC_TAR = "src_tar"
    TAR = "tar"
    TAR_GZ = "tar.gz"
    TAR_Z = "tar.Z"
    TGZ = "tgz"
    ZIP = "zip"

    @property
    def label(self) -> str:
        return self.value


class PackageType(StrEnum):
    """Package flavours."""
    JDK = "jdk"
    JRE = "jre"

    @property
    def label(self) -> str:
        return self.value.upper()


class ReleaseStatus(StrEnum):
    """Release status of a build."""
    EA = "ea"
    GA = "ga"

    @property
    def label(self) -> str:
        return "Early Access" if self is ReleaseStatus.EA else "General Availability"


class TermOfSupport(StrEnum):
    """Support duration class of a feature release."""
    LTS = "lts"
    MTS = "mts"
    STS = "sts"


class FPU(StrEnum):
    """Floating point ABI of ARM builds."""
    HARD_FLOAT = "hard_float"
    SOFT_FLOAT = "soft_float"
    UNKNOWN = "unknown"


class Verification(StrEnum):
    """Tri-state verification flag (TCK, AQAvit)."""
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"


class Distribution(BaseModel):
    """Static description of a JDK distribution."""

    name: str = Field(..., description="Enum style name")
    label: str = Field(..., description="Human readable name")
    api_string: str = Field(..., description="Token used by the Disco API")
    maintained: bool = Field(default=True, description="Still receives builds")
    synonyms: tuple[str, ...] = Field(default=(), description="Accepted spellings")

    model_config = ConfigDict(frozen=True)


class Distro(StrEnum):
    """JDK distributions known to the catalog."""
    AOJ = "aoj"
    AOJ_OPENJ9 = "aoj_openj9"
    BISHENG = "bisheng"
    CORRETTO = "corretto"
    DRAGONWELL = "dragonwell"
    GLUON_GRAALVM = "gluon_graalvm"
    GRAALVM_CE8 = "graalvm_ce8"
    GRAALVM_CE11 = "graalvm_ce11"
    GRAALVM_CE16 = "graalvm_ce16"
    GRAALVM_CE17 = "graalvm_ce17"
    JETBRAINS = "jetbrains"
    KONA = "kona"
    LIBERICA = "liberica"
    LIBERICA_NATIVE = "liberica_native"
    MANDREL = "mandrel"
    MICROSOFT = "microsoft"
    OJDK_BUILD = "ojdk_build"
    OPEN_LOGIC = "openlogic"
    ORACLE_OPEN_JDK = "oracle_open_jdk"
    ORACLE = "oracle"
    RED_HAT = "redhat"
    SAP_MACHINE = "sap_machine"
    SEMERU = "semeru"
    SEMERU_CERTIFIED = "semeru_certified"
    TEMURIN = "temurin"
    TRAVA = "trava"
    ZULU = "zulu"
    ZULU_PRIME = "zulu_prime"

    def get(self) -> Distribution:
        """Return the static distribution record."""
        return _DISTRIBUTIONS[self]

    @property
    def label(self) -> str:
        return self.get().label

    @property
    def maintained(self) -> bool:
        return self.get().maintained

    @classmethod
    def all(cls) -> list[Distro]:
        """All distros, reverse sorted by enum name."""
        return sorted(cls, key=lambda d: d.name, reverse=True)

    @classmethod
    def maintained_distros(cls) -> list[Distro]:
        return [d for d in cls.all() if d.maintained]

    @classmethod
    def with_java_versioning(cls) -> list[Distro]:
        """Distros whose version numbers follow the Java version scheme."""
        return [d for d in cls if d not in _NON_JAVA_VERSIONING]


# ──────────────────────────────────────────────
#  Labels and static properties
# ──────────────────────────────────────────────

_LIBC_LABELS: dict[LibCType, str] = {
    LibCType.GLIBC: "glibc",
    LibCType.LIBC: "libc",
    LibCType.MUSL: "musl",
    LibCType.C_STD_LIB: "c std. lib",
}

_OS_LABELS: dict[OperatingSystem, str] = {
    OperatingSystem.AIX: "AIX",
    OperatingSystem.ALPINE_LINUX: "Alpine Linux",
    OperatingSystem.LINUX: "Linux",
    OperatingSystem.LINUX_MUSL: "Linux Musl",
    OperatingSystem.MACOS: "Mac OS",
    OperatingSystem.QNX: "QNX",
    OperatingSystem.SOLARIS: "Solaris",
    OperatingSystem.WINDOWS: "Windows",
}

_OS_LIBC: dict[OperatingSystem, LibCType] = {
    OperatingSystem.AIX: LibCType.LIBC,
    OperatingSystem.ALPINE_LINUX: LibCType.MUSL,
    OperatingSystem.LINUX: LibCType.GLIBC,
    OperatingSystem.LINUX_MUSL: LibCType.MUSL,
    OperatingSystem.MACOS: LibCType.LIBC,
    OperatingSystem.QNX: LibCType.LIBC,
    OperatingSystem.SOLARIS: LibCType.LIBC,
    OperatingSystem.WINDOWS: LibCType.C_STD_LIB,
}

_ARCH_32_BIT = frozenset({
    Architecture.AARCH32,
    Architecture.ARM,
    Architecture.MIPS,
    Architecture.PPC,
    Architecture.SPARC,
    Architecture.X86,
    Architecture.I386,
    Architecture.I586,
    Architecture.I686,
})

_NON_JAVA_VERSIONING = frozenset({
    Distro.GRAALVM_CE8,
    Distro.GRAALVM_CE11,
    Distro.GRAALVM_CE16,
    Distro.GRAALVM_CE17,
    Distro.MANDREL,
    Distro.LIBERICA_NATIVE,
})


def _distribution(distro: Distro, label: str, maintained: bool, *synonyms: str) -> Distribution:
    return Distribution(
        name=distro.name,
        label=label,
        api_string=distro.value,
        maintained=maintained,
        synonyms=synonyms,
    )


_DISTRIBUTIONS: dict[Distro, Distribution] = {
    Distro(d.api_string): d
    for d in (
        _distribution(Distro.AOJ, "AdoptOpenJDK", False, "aoj", "AOJ", "adopt"),
        _distribution(Distro.AOJ_OPENJ9, "AdoptOpenJDK OpenJ9", False,
                      "aoj_openj9", "AOJ_OpenJ9", "AOJ_OPENJ9", "AOJ OpenJ9", "AOJ OPENJ9", "aoj openj9"),
        _distribution(Distro.BISHENG, "Bi Sheng", True,
                      "bisheng", "BISHENG", "BiSheng", "bi_sheng", "BI_SHENG", "bi-sheng", "BI-SHENG",
                      "bi sheng", "Bi Sheng", "BI SHENG"),
        _distribution(Distro.CORRETTO, "Corretto", True, "corretto", "CORRETTO", "Corretto"),
        _distribution(Distro.DRAGONWELL, "Dragonwell", True, "dragonwell", "DRAGONWELL", "Dragonwell"),
        _distribution(Distro.GLUON_GRAALVM, "Gluon GraalVM", True,
                      "gluon_graalvm", "GLUON_GRAALVM", "gluongraalvm", "GLUONGRAALVM", "gluon graalvm",
                      "GLUON GRAALVM", "Gluon GraalVM", "Gluon"),
        _distribution(Distro.GRAALVM_CE8, "GraalVM CE8", False,
                      "graalvm_ce8", "graalvmce8", "GraalVM CE 8", "GraalVMCE8", "GraalVM_CE8"),
        _distribution(Distro.GRAALVM_CE11, "GraalVM CE11", True,
                      "graalvm_ce11", "graalvmce11", "GraalVM CE 11", "GraalVMCE11", "GraalVM_CE11"),
        _distribution(Distro.GRAALVM_CE16, "GraalVM CE16", True,
                      "graalvm_ce16", "graalvmce16", "GraalVM CE 16", "GraalVMCE16", "GraalVM_CE16"),
        _distribution(Distro.GRAALVM_CE17, "GraalVM CE17", True,
                      "graalvm_ce17", "graalvmce17", "GraalVM CE 17", "GraalVMCE17", "GraalVM_CE17"),
        _distribution(Distro.JETBRAINS, "JetBrains", True, "jetbrains", "JetBrains", "JETBRAINS"),
        _distribution(Distro.KONA, "Kona", True, "kona", "KONA", "Kona"),
        _distribution(Distro.LIBERICA, "Liberica", True, "liberica", "LIBERICA", "Liberica"),
        _distribution(Distro.LIBERICA_NATIVE, "Liberica Native", True,
                      "liberica_native", "LIBERICA_NATIVE", "libericaNative", "LibericaNative",
                      "liberica native", "LIBERICA NATIVE", "Liberica Native"),
        _distribution(Distro.MANDREL, "Mandrel", True, "mandrel", "MANDREL", "Mandrel"),
        _distribution(Distro.MICROSOFT, "Microsoft", True,
                      "microsoft", "Microsoft", "MICROSOFT", "Microsoft OpenJDK", "Microsoft Build of OpenJDK"),
        _distribution(Distro.OJDK_BUILD, "OJDK Build", True,
                      "ojdk_build", "OJDK_BUILD", "OJDK Build", "ojdk build", "ojdkbuild", "OJDKBuild"),
        _distribution(Distro.OPEN_LOGIC, "OpenLogic", True,
                      "openlogic", "OPENLOGIC", "OpenLogic", "open_logic", "OPEN_LOGIC", "Open Logic",
                      "OPEN LOGIC", "open logic"),
        _distribution(Distro.ORACLE_OPEN_JDK, "Oracle OpenJDK", True,
                      "oracle_open_jdk", "ORACLE_OPEN_JDK", "oracle_openjdk", "ORACLE_OPENJDK",
                      "Oracle_OpenJDK", "Oracle OpenJDK", "oracle openjdk", "ORACLE OPENJDK", "open_jdk",
                      "openjdk", "OpenJDK", "Open JDK", "OPEN_JDK", "open-jdk", "OPEN-JDK", "Oracle-OpenJDK",
                      "oracle-openjdk", "ORACLE-OPENJDK", "oracle-open-jdk", "ORACLE-OPEN-JDK"),
        _distribution(Distro.ORACLE, "Oracle", True, "oracle", "Oracle", "ORACLE"),
        _distribution(Distro.RED_HAT, "Red Hat", True,
                      "redhat", "REDHAT", "RedHat", "red_hat", "RED_HAT", "Red Hat", "red hat", "RED HAT"),
        _distribution(Distro.SAP_MACHINE, "SAP Machine", True,
                      "sap_machine", "sapmachine", "SAPMACHINE", "SAP_MACHINE", "SAPMachine", "SAP Machine",
                      "sap-machine", "SAP-Machine", "SAP-MACHINE"),
        _distribution(Distro.SEMERU, "Semeru", True, "semeru", "Semeru", "SEMERU"),
        _distribution(Distro.SEMERU_CERTIFIED, "Semeru certified", True,
                      "semeru_certified", "SEMERU_CERTIFIED", "Semeru_Certified", "Semeru_certified",
                      "semeru certified", "SEMERU CERTIFIED", "Semeru Certified", "Semeru certified"),
        _distribution(Distro.TEMURIN, "Temurin", True, "temurin", "Temurin", "TEMURIN"),
        _distribution(Distro.TRAVA, "Trava", True,
                      "trava", "TRAVA", "Trava", "trava_openjdk", "TRAVA_OPENJDK", "trava openjdk",
                      "TRAVA OPENJDK"),
        _distribution(Distro.ZULU, "Zulu", True,
                      "zulu", "ZULU", "Zulu", "zulucore", "ZULUCORE", "ZuluCore", "zulu_core", "ZULU_CORE",
                      "Zulu_Core", "zulu core", "ZULU CORE", "Zulu Core"),
        _distribution(Distro.ZULU_PRIME, "Zulu Prime", True,
                      "zing", "ZING", "Zing", "prime", "PRIME", "Prime", "zuluprime", "ZULUPRIME", "ZuluPrime",
                      "zulu_prime", "ZULU_PRIME", "Zulu_Prime", "zulu prime", "ZULU PRIME", "Zulu Prime"),
    )
}


# ──────────────────────────────────────────────
#  Synonym tables
# ──────────────────────────────────────────────

OS_SYNONYMS: dict[OperatingSystem, tuple[str, ...]] = {
    OperatingSystem.AIX: ("aix", "AIX", "-aix"),
    OperatingSystem.ALPINE_LINUX: (
        "alpine_linux", "alpine-linux", "ALPINE-LINUX", "Alpine_Linux", "ALPINE_LINUX",
        "alpine", "ALPINE", "Alpine", "Alpine Linux", "alpine linux", "ALPINE LINUX",
    ),
    OperatingSystem.LINUX: ("linux", "Linux", "LINUX", "-linux", "unix", "UNIX", "Unix", "-unix"),
    OperatingSystem.LINUX_MUSL: (
        "linux_musl", "linux-musl", "-linux-musl", "Linux-Musl", "Linux_Musl", "LINUX_MUSL",
        "linux musl", "Linux Musl", "LINUX MUSL",
    ),
    OperatingSystem.MACOS: (
        "macos", "MACOS", "MacOS", "Mac OS", "mac_os", "Mac_OS", "mac-os", "Mac-OS", "mac", "MAC",
        "darwin", "-darwin", "osx", "OSX", "macosx", "MACOSX", "-macosx", "Mac OSX", "mac osx",
    ),
    OperatingSystem.QNX: ("qnx", "QNX", "-qnx"),
    OperatingSystem.SOLARIS: ("solaris", "SOLARIS", "Solaris", "-solaris"),
    OperatingSystem.WINDOWS: ("windows", "Windows", "WINDOWS", "win", "Win", "WIN", "-win"),
}

ARCHITECTURE_SYNONYMS: dict[Architecture, tuple[str, ...]] = {
    Architecture.AARCH32: ("aarch32", "AARCH32", "arm32", "ARM32", "armv7l", "armhf"),
    Architecture.AARCH64: ("aarch64", "AARCH64", "aarch_64", "AARCH_64"),
    Architecture.AMD64: ("amd64", "AMD64", "_amd64"),
    Architecture.ARM: ("arm", "ARM"),
    Architecture.ARM64: ("arm64", "ARM64", "arm_64", "ARM_64"),
    Architecture.MIPS: ("mips", "MIPS"),
    Architecture.PPC: ("ppc", "PPC"),
    Architecture.PPC64: ("ppc64", "PPC64"),
    Architecture.PPC64LE: ("ppc64le", "PPC64LE"),
    Architecture.RISCV64: ("riscv64", "RISCV64", "riscv", "RISCV"),
    Architecture.S390X: ("s390x", "S390X", "s390", "S390"),
    Architecture.SPARC: ("sparc", "SPARC"),
    Architecture.SPARCV9: ("sparcv9", "SPARCV9"),
    Architecture.X64: ("x64", "X64", "x86_64", "X86_64", "x86-64", "X86-64", "x86_64_v2"),
    Architecture.X86: ("x86", "X86", "x32", "X32", "x86_32", "X86_32", "x86-32", "X86-32"),
    Architecture.I386: ("i386", "I386"),
    Architecture.I586: ("i586", "I586"),
    Architecture.I686: ("i686", "I686"),
}

ARCHIVE_TYPE_SYNONYMS: dict[ArchiveType, tuple[str, ...]] = {
    ArchiveType.APK: ("apk", "APK", ".apk"),
    ArchiveType.CAB: ("cab", "CAB", ".cab"),
    ArchiveType.DEB: ("deb", "DEB", ".deb"),
    ArchiveType.DMG: ("dmg", "DMG", ".dmg"),
    ArchiveType.EXE: ("exe", "EXE", ".exe"),
    ArchiveType.MSI: ("msi", "MSI", ".msi"),
    ArchiveType.PKG: ("pkg", "PKG", ".pkg"),
    ArchiveType.RPM: ("rpm", "RPM", ".rpm"),
    ArchiveType.SRC_TAR: ("src_tar", "SRC_TAR", "src.tar.gz", ".src.tar.gz", "source"),
    ArchiveType.TAR: ("tar", "TAR", ".tar"),
    ArchiveType.TAR_GZ: ("tar.gz", "TAR.GZ", ".tar.gz", "tar_gz", "TAR_GZ"),
    ArchiveType.TAR_Z: ("tar.Z", "TAR.Z", "tar.z", ".tar.Z", ".tar.z"),
    ArchiveType.TGZ: ("tgz", "TGZ", ".tgz"),
    ArchiveType.ZIP: ("zip", "ZIP", ".zip"),
}

PACKAGE_TYPE_SYNONYMS: dict[PackageType, tuple[str, ...]] = {
    PackageType.JDK: ("jdk", "JDK", "Jdk"),
    PackageType.JRE: ("jre", "JRE", "Jre"),
}

LIBC_TYPE_SYNONYMS: dict[LibCType, tuple[str, ...]] = {
    LibCType.GLIBC: ("glibc", "GLIBC", "Glibc"),
    LibCType.LIBC: ("libc", "LIBC", "Libc"),
    LibCType.MUSL: ("musl", "MUSL", "Musl"),
    LibCType.C_STD_LIB: ("c_std_lib", "C_STD_LIB", "c std lib", "C STD LIB", "c_stdlib", "stdlib"),
}

RELEASE_STATUS_SYNONYMS: dict[ReleaseStatus, tuple[str, ...]] = {
    ReleaseStatus.EA: ("ea", "EA", "Ea", "-ea", "-EA", "early_access", "EARLY_ACCESS", "early access"),
    ReleaseStatus.GA: ("ga", "GA", "Ga", "-ga", "-GA", "general_availability", "GENERAL_AVAILABILITY",
                       "general availability"),
}

TERM_OF_SUPPORT_SYNONYMS: dict[TermOfSupport, tuple[str, ...]] = {
    TermOfSupport.LTS: ("lts", "LTS", "long_term_support", "long term support"),
    TermOfSupport.MTS: ("mts", "MTS", "mid_term_support", "mid term support"),
    TermOfSupport.STS: ("sts", "STS", "short_term_support", "short term support"),
}

FPU_SYNONYMS: dict[FPU, tuple[str, ...]] = {
    FPU.HARD_FLOAT: ("hard_float", "HARD_FLOAT", "hard float", "hardfloat", "hf", "HF"),
    FPU.SOFT_FLOAT: ("soft_float", "SOFT_FLOAT", "soft float", "softfloat", "sf", "SF"),
    FPU.UNKNOWN: ("unknown", "UNKNOWN"),
}

VERIFICATION_SYNONYMS: dict[Verification, tuple[str, ...]] = {
    Verification.YES: ("yes", "YES", "Yes", "true", "TRUE", "True"),
    Verification.NO: ("no", "NO", "No", "false", "FALSE", "False"),
    Verification.UNKNOWN: ("unknown", "UNKNOWN", "Unknown"),
}

DISTRO_SYNONYMS: dict[Distro, tuple[str, ...]] = {
    distro: distribution.synonyms for distro, distribution in _DISTRIBUTIONS.items()
}
