"""Binary-related domain value objects.

This module contains value objects describing kubectl binaries found on
the host, the collections the locator returns, and the naming convention
of the local download cache.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, overload

from eke_kubectl.domain.exceptions import (
    KubectlConfigError,
    NoCompatibleBinaryError,
    NoVersionFoundError,
    VersionParseError,
)
from eke_kubectl.domain.version import SemanticVersion

KUBECTL_BINARY_NAME = "kubectl"

SUPPORTED_OS = ("linux", "darwin", "windows")
SUPPORTED_ARCH = ("amd64", "arm64", "386", "arm", "ppc64le", "s390x")

# Minor versions a client may be away from the server
VERSION_SKEW = 1


@dataclass(frozen=True)
class Platform:
    """Platform value object representing OS and architecture.

    Values follow the naming used by the kubernetes release bucket
    (``bin/<os>/<arch>/kubectl``).

    Attributes:
        os: Operating system, one of SUPPORTED_OS.
        arch: Architecture, one of SUPPORTED_ARCH.
    """

    os: str
    arch: str

    def __post_init__(self) -> None:
        """Validate platform configuration."""
        if self.os not in SUPPORTED_OS:
            raise KubectlConfigError(
                f"os must be one of {SUPPORTED_OS}, got: {self.os!r}"
            )
        if self.arch not in SUPPORTED_ARCH:
            raise KubectlConfigError(
                f"arch must be one of {SUPPORTED_ARCH}, got: {self.arch!r}"
            )

    @property
    def executable_suffix(self) -> str:
        return ".exe" if self.os == "windows" else ""

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


@dataclass(frozen=True)
class DiscoveredBinary:
    """A kubectl binary found on disk together with the version it reports.

    Attributes:
        path: Absolute path to the binary.
        version: Version reported by (or, for cached binaries, recorded for)
            the binary at scan time.
    """

    path: Path
    version: SemanticVersion

    def __post_init__(self) -> None:
        if not self.path.is_absolute():
            raise KubectlConfigError(f"binary path must be absolute, got: {self.path}")


class BinaryCollection:
    """Ordered sequence of discovered binaries.

    Duplicates (same version at different paths) are kept: the filesystem
    scan is the source of truth, not a deduplicated index.
    """

    def __init__(self, binaries: Iterable[DiscoveredBinary] = ()) -> None:
        self._binaries: tuple[DiscoveredBinary, ...] = tuple(binaries)

    def sorted(self, reverse: bool = False) -> BinaryCollection:
        """Return a new collection ordered by version.

        The sort is stable, so binaries sharing a version keep their
        relative order (system binaries ahead of cached ones).
        """
        return BinaryCollection(
            sorted(self._binaries, key=lambda b: b.version, reverse=reverse)
        )

    def newest(self) -> DiscoveredBinary | None:
        """Return the highest-versioned binary, or None if empty."""
        if not self._binaries:
            return None
        return max(self._binaries, key=lambda b: b.version)

    def find_compatible(self, requested: SemanticVersion) -> DiscoveredBinary:
        """Return the binary best suited to talk to a server at ``requested``.

        A binary is compatible when its major version matches and its minor
        version is within VERSION_SKEW of the requested one. The highest
        compatible version not exceeding ``requested`` wins; when every
        candidate is newer, the lowest of them is used. Equal versions
        resolve to the earliest binary in the collection.

        Raises:
            NoCompatibleBinaryError: If no binary is inside the window.
        """
        candidates = [
            binary
            for binary in self._binaries
            if binary.version.major == requested.major
            and abs(binary.version.minor - requested.minor) <= VERSION_SKEW
        ]
        if not candidates:
            raise NoCompatibleBinaryError(requested)

        not_newer = [binary for binary in candidates if binary.version <= requested]
        if not_newer:
            return max(not_newer, key=lambda binary: binary.version)
        return min(candidates, key=lambda binary: binary.version)

    def most_recent(self) -> DiscoveredBinary:
        """Return the newest binary, preferring final releases over prereleases.

        Raises:
            NoVersionFoundError: If the collection is empty.
        """
        releases = [b for b in self._binaries if not b.version.is_prerelease]
        pool = releases or list(self._binaries)
        if not pool:
            raise NoVersionFoundError()
        return max(pool, key=lambda b: b.version)

    def __iter__(self) -> Iterator[DiscoveredBinary]:
        return iter(self._binaries)

    def __len__(self) -> int:
        return len(self._binaries)

    def __bool__(self) -> bool:
        return bool(self._binaries)

    @overload
    def __getitem__(self, index: int) -> DiscoveredBinary: ...

    @overload
    def __getitem__(self, index: slice) -> BinaryCollection: ...

    def __getitem__(self, index: int | slice) -> DiscoveredBinary | BinaryCollection:
        if isinstance(index, slice):
            return BinaryCollection(self._binaries[index])
        return self._binaries[index]

    def __add__(self, other: BinaryCollection) -> BinaryCollection:
        if not isinstance(other, BinaryCollection):
            return NotImplemented
        return BinaryCollection(self._binaries + other._binaries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryCollection):
            return NotImplemented
        return self._binaries == other._binaries

    def __repr__(self) -> str:
        return f"BinaryCollection({list(self._binaries)!r})"


_CACHE_ENTRY_RE = re.compile(
    rf"^{KUBECTL_BINARY_NAME}-v(?P<version>[^/\\]+)-(?P<os>[a-z]+)-(?P<arch>[a-z0-9]+)(?:\.exe)?$"
)


@dataclass(frozen=True)
class CacheEntry:
    """Naming convention for binaries stored in the local download cache.

    One file per version and platform, e.g. ``kubectl-v1.20.1-linux-amd64``
    (``kubectl-v1.20.1-windows-amd64.exe`` on windows). Two processes
    computing the name for the same version always agree on it.

    Attributes:
        version: Version of the cached binary.
        platform: Platform the binary was built for.
    """

    version: SemanticVersion
    platform: Platform

    @property
    def filename(self) -> str:
        return (
            f"{KUBECTL_BINARY_NAME}-{self.version.tag}-"
            f"{self.platform.os}-{self.platform.arch}{self.platform.executable_suffix}"
        )

    @classmethod
    def from_filename(cls, filename: str) -> CacheEntry | None:
        """Parse a cache filename back into an entry.

        Returns:
            The CacheEntry, or None if the name does not follow the convention.
        """
        match = _CACHE_ENTRY_RE.match(filename)
        if match is None:
            return None
        if filename.endswith(".exe") != (match.group("os") == "windows"):
            return None
        try:
            version = SemanticVersion.parse(match.group("version"))
            platform = Platform(os=match.group("os"), arch=match.group("arch"))
        except (VersionParseError, KubectlConfigError):
            return None
        return cls(version=version, platform=platform)
