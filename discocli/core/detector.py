"""Detection of locally installed JDK distributions.

Walks well known install folders for ``java`` binaries, runs
``java -version`` for each and combines its output with the ``release``
file next to the binary to identify the vendor.
"""

from __future__ import annotations

import os
import re
import subprocess
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field

from discocli.core.registry import FieldKind, host_architecture, host_operating_system, normalize_or_none
from discocli.core.types import OperatingSystem
from discocli.core.version import VersionNumber

logger = structlog.get_logger()

MACOS_JAVA_INSTALL_PATH = Path("/System/Volumes/Data/Library/Java/JavaVirtualMachines/")
WINDOWS_JAVA_INSTALL_PATH = Path("C:\\Program Files\\Java\\")
LINUX_JAVA_INSTALL_PATH = Path("/usr/lib/jvm")
SDKMAN_FOLDER = Path.home() / ".sdkman" / "candidates" / "java"

FEATURES = ("loom", "panama", "metropolis", "valhalla", "lanai", "kona_fiber", "crac")

UNKNOWN_BUILD = "Unknown build of OpenJDK"

_ZULU_BUILD_PATTERN = re.compile(r"\((build\s)(.*)\)")
_GRAALVM_VERSION_PATTERN = re.compile(r"(.*graalvm\s)(.*)(\s\(.*)")
_QUOTED_VERSION_PATTERN = re.compile(r'"([^"]+)"')
_NUMERIC_VERSION_PATTERN = re.compile(r"\d+(?:\.\d+)*")

# IMPLEMENTOR value of the release file -> (name, api string)
_IMPLEMENTORS: dict[str, tuple[str, str]] = {
    "AdoptOpenJDK": ("Adopt OpenJDK", "aoj"),
    "Alibaba": ("Dragonwell", "dragonwell"),
    "Amazon.com Inc.": ("Corretto", "corretto"),
    "Azul Systems, Inc.": ("Zulu", "zulu"),
    "mandrel": ("Mandrel", "mandrel"),
    "Microsoft": ("Microsoft", "microsoft"),
    "ojdkbuild": ("OJDK Build", "ojdk_build"),
    "Oracle Corporation": ("Oracle OpenJDK", "oracle_open_jdk"),
    "Red Hat, Inc.": ("Red Hat", "redhat"),
    "SAP SE": ("SAP Machine", "sap_machine"),
    "OpenLogic": ("OpenLogic", "openlogic"),
    "JetBrains s.r.o.": ("JetBrains", "jetbrains"),
    "Eclipse Foundation": ("Temurin", "temurin"),
    "Tencent": ("Kona", "kona"),
    "Bisheng": ("Bisheng", "bisheng"),
    "Debian": ("Debian", "debian"),
}


class DetectedInstallation(BaseModel):
    """A JDK found on the local machine."""

    distribution: str = Field(..., description="Distribution api string")
    version: VersionNumber = Field(..., description="Installed version")
    operating_system: str = Field(..., description="Operating system api string")
    architecture: str = Field(..., description="Architecture api string")
    package_type: str = Field(default="jdk", description="Package type api string")
    javafx_bundled: bool = Field(default=False, description="Bundled with JavaFX")
    feature: str = Field(default="", description="Feature flag such as loom or crac")
    in_use: bool = Field(default=False, description="Lives below JAVA_HOME")
    path: str = Field(default="", description="Installation folder")
    name: str = Field(default="", description="Human readable distribution name")

    model_config = ConfigDict(frozen=True)

    def to_descriptor(self) -> str:
        """Render as ``distro,version,os,arch,packageType[,fx][,feature]``."""
        parts = [
            self.distribution,
            self.version.to_string(include_build=True),
            self.operating_system,
            self.architecture,
            self.package_type,
        ]
        if self.javafx_bundled:
            parts.append("fx")
        if self.feature:
            parts.append(self.feature)
        return ",".join(parts)


def read_release_file(release_file: Path) -> dict[str, str]:
    """Parse a JDK ``release`` file into a fresh dict with quotes stripped."""
    properties: dict[str, str] = {}
    try:
        text = release_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("release_file_unreadable", path=str(release_file), error=str(e))
        return properties
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        properties[key.strip()] = value.strip().strip('"')
    return properties


def _contains_javafx(home: Path) -> bool:
    jmods = home / "jmods"
    if jmods.is_dir():
        return any(p.is_file() and p.name.startswith("javafx") for p in jmods.iterdir())
    jre_lib_ext = home / "jre" / "lib" / "ext"
    if jre_lib_ext.is_dir():
        return any(p.is_file() and p.name.lower() == "jfxrt.jar" for p in jre_lib_ext.iterdir())
    return False


def _graalvm_version(line: str, fallback: VersionNumber) -> VersionNumber:
    """GraalVM release number from a VM line such as ``... graalvm ce 22.3.0 (build ...)``."""
    match = _GRAALVM_VERSION_PATTERN.search(line)
    if not match:
        return fallback
    numeric = _NUMERIC_VERSION_PATTERN.search(match.group(2))
    if not numeric:
        return fallback
    try:
        return VersionNumber.from_text(numeric.group(0))
    except ValueError:
        logger.debug("graalvm_version_unparsed", line=line)
        return fallback


def parse_version_output(
    lines: list[str],
    home: Path,
    release: dict[str, str],
    *,
    operating_system: str,
    default_architecture: str,
    java_home: str = "",
) -> DetectedInstallation | None:
    """Identify an installation from ``java -version`` output.

    Args:
        lines: Output lines of ``java -version``
        home: Installation folder (parent of ``bin``)
        release: Parsed ``release`` file, possibly empty
        operating_system: Host OS api string
        default_architecture: Host architecture api string, used when the
            release file has no OS_ARCH
        java_home: Current JAVA_HOME, used for the in-use flag

    Returns:
        The detected installation, None if the output has no version
    """
    if len(lines) < 2:
        return None

    line1, line2 = lines[0], lines[1]
    line3 = lines[2].lower() if len(lines) > 2 else ""
    name = UNKNOWN_BUILD
    api_string = ""
    version: VersionNumber | None = None

    if line1.startswith("java"):
        name, api_string = "Oracle", "oracle"

    if "Zulu" in line2:
        name, api_string = "Zulu", "zulu"
        match = _ZULU_BUILD_PATTERN.search(line2)
        if match:
            try:
                version = VersionNumber.from_text(match.group(2))
            except ValueError:
                version = None
    elif "Semeru" in line2:
        if "Certified" in line2:
            name, api_string = "Semeru certified", "semeru_certified"
        else:
            name, api_string = "Semeru", "semeru"
    elif "Tencent" in line2:
        name, api_string = "Kona", "kona"
    elif "Bisheng" in line2:
        name, api_string = "Bisheng", "bisheng"

    if version is None:
        quoted = _QUOTED_VERSION_PATTERN.search(line1)
        if not quoted:
            return None
        try:
            version = VersionNumber.from_text(quoted.group(1))
        except ValueError:
            return None

    javafx_bundled = _contains_javafx(home)
    architecture = ""

    if release:
        implementor = release.get("IMPLEMENTOR")
        if implementor and name == UNKNOWN_BUILD and implementor in _IMPLEMENTORS:
            name, api_string = _IMPLEMENTORS[implementor]
        if "OS_ARCH" in release:
            arch = normalize_or_none(FieldKind.ARCHITECTURE, release["OS_ARCH"].lower())
            architecture = arch.value if arch else release["OS_ARCH"].lower()
        if name == "Adopt OpenJDK" and "JVM_VARIANT" in release:
            jvm_variant = release["JVM_VARIANT"].lower()
            if jvm_variant == "dcevm":
                name, api_string = "Trava OpenJDK", "trava"
            elif jvm_variant == "openj9":
                name, api_string = "Adopt OpenJDK J9", "aoj_openj9"
        if not javafx_bundled and "javafx" in release.get("MODULES", ""):
            javafx_bundled = True

    feature = next((f for f in FEATURES if f in line3), "")

    if name == UNKNOWN_BUILD and line3:
        readme = home / "readme.txt"
        if readme.exists():
            try:
                readme_text = readme.read_text(encoding="utf-8", errors="replace").lower()
            except OSError as e:
                logger.warning("readme_unreadable", path=str(readme), error=str(e))
                readme_text = ""
            if "liberica native image kit" in readme_text:
                name, api_string = "Liberica Native", "liberica_native"
                version = _graalvm_version(line3, version)
            elif "liberica" in readme_text:
                name, api_string = "Liberica", "liberica"
        elif "graalvm" in line3:
            name = "GraalVM"
            api_string = f"graalvm_ce{version.feature}" if version.feature >= 8 else ""
            version = _graalvm_version(line3, version)
            if release.get("VENDOR", "").lower() == "gluon":
                name, api_string = "Gluon GraalVM", "gluon_graalvm"
        elif "microsoft" in line3:
            name, api_string = "Microsoft", "microsoft"
        elif "corretto" in line3:
            name, api_string = "Corretto", "corretto"
        elif "temurin" in line3:
            name, api_string = "Temurin", "temurin"

    in_use = bool(java_home) and str(home).startswith(java_home.rstrip("/\\"))

    return DetectedInstallation(
        distribution=api_string,
        version=version,
        operating_system=operating_system,
        architecture=architecture or default_architecture,
        javafx_bundled=javafx_bundled,
        feature=feature,
        in_use=in_use,
        path=str(home),
        name=name,
    )


class Detector:
    """Finds JDK installations below a set of folders.

    Probes run one after another; each gets a fresh release-file parse.
    """

    def __init__(self, timeout: float = 20.0):
        self.timeout = timeout
        self.operating_system = host_operating_system()
        self.architecture = host_architecture()
        self.java_file = "java.exe" if self.operating_system is OperatingSystem.WINDOWS else "java"
        self.java_home = os.environ.get("JAVA_HOME", "")

    def default_search_paths(self) -> list[Path]:
        """Install folders of the host OS plus the SDKMAN candidates folder."""
        if self.operating_system is OperatingSystem.MACOS:
            paths = [MACOS_JAVA_INSTALL_PATH]
        elif self.operating_system is OperatingSystem.WINDOWS:
            paths = [WINDOWS_JAVA_INSTALL_PATH]
        elif self.operating_system in (OperatingSystem.LINUX, OperatingSystem.ALPINE_LINUX):
            paths = [LINUX_JAVA_INSTALL_PATH]
        else:
            paths = [Path(".")]
        if SDKMAN_FOLDER.exists():
            paths.append(SDKMAN_FOLDER)
        return paths

    def find_java_binaries(self, search_path: Path) -> list[Path]:
        """All readable java binaries below search_path, skipping JRE folders."""
        found: set[Path] = set()
        for root, _dirs, files in os.walk(search_path, onerror=lambda e: None):
            for filename in files:
                if filename.lower() != self.java_file:
                    continue
                candidate = Path(root) / filename
                if "jre" in str(candidate) or not os.access(candidate, os.R_OK):
                    continue
                if candidate.parent.name == "bin":
                    found.add(candidate)
        return sorted(found)

    def probe(self, java: Path) -> DetectedInstallation | None:
        """Run ``java -version`` and identify the installation."""
        try:
            completed = subprocess.run(
                [str(java), "-version"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("java_probe_failed", java=str(java), error=str(e))
            return None

        # java -version writes to stderr
        output = completed.stderr or completed.stdout
        lines = [line for line in output.splitlines() if line.strip()]
        home = java.parent.parent
        release_file = home / "release"
        release = read_release_file(release_file) if release_file.exists() else {}

        installation = parse_version_output(
            lines,
            home,
            release,
            operating_system=self.operating_system.value if self.operating_system else "",
            default_architecture=self.architecture.value if self.architecture else "",
            java_home=self.java_home,
        )
        logger.debug("java_probed", java=str(java), found=installation is not None)
        return installation

    def detect(self, search_paths: list[Path] | None = None) -> list[DetectedInstallation]:
        """Detect installations below the given or default folders."""
        paths = [p for p in (search_paths or []) if str(p)] or self.default_search_paths()
        installations: list[DetectedInstallation] = []
        for search_path in paths:
            if not search_path.exists():
                logger.debug("search_path_missing", path=str(search_path))
                continue
            for java in self.find_java_binaries(search_path):
                installation = self.probe(java)
                if installation is not None:
                    installations.append(installation)
        return installations

