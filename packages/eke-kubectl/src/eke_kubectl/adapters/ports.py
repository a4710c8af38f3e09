"""Port interfaces for the eke kubectl core.

Ports define the contracts that adapters must implement.
These are Protocol classes (structural subtyping) for flexible testing.
Each port has one production adapter in this package and one fake in
``eke_kubectl.adapters.fakes``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Mapping, NoReturn, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from eke_kubectl.domain.binary import BinaryCollection, DiscoveredBinary, Platform
    from eke_kubectl.domain.version import SemanticVersion


@runtime_checkable
class TimeoutAware(Protocol):
    """Capability exposed by errors that can tell whether they were a timeout.

    VersionResolver uses this to tell an unreachable cluster from other
    probe faults (auth errors, malformed responses) without inspecting
    error text.
    """

    def timeout(self) -> bool:
        """Return True if the failure was a timeout or an unreachable endpoint."""
        ...


@runtime_checkable
class BinaryLocatorPort(Protocol):
    """Port interface for finding kubectl binaries already on the host.

    Contract:
        - system_binaries() scans system directories, executing each binary
          to learn its version; unusable binaries are skipped, never fatal
        - local_binaries() lists the managed cache, versions come from filenames
        - all_binaries() concatenates both and sorts by version
        - find_compatible() raises NoCompatibleBinaryError when nothing fits
        - most_recent_available() raises NoVersionFoundError when nothing exists
        - Results are recomputed on every call
    """

    def system_binaries(self) -> BinaryCollection:
        """Return kubectl binaries found in system directories.

        Raises:
            OSError: If the system directories cannot be listed at all.
        """
        ...

    def local_binaries(self) -> BinaryCollection:
        """Return kubectl binaries held in the local download cache.

        Raises:
            OSError: If the cache directory exists but cannot be listed.
        """
        ...

    def all_binaries(self, reverse_sort: bool = False) -> BinaryCollection:
        """Return system and local binaries sorted by version.

        Args:
            reverse_sort: True for newest first.
        """
        ...

    def find_compatible(self, requested: SemanticVersion) -> DiscoveredBinary:
        """Return the binary best suited to talk to a server at ``requested``.

        Raises:
            NoCompatibleBinaryError: If no binary is inside the version-skew window.
        """
        ...

    def most_recent_available(self) -> DiscoveredBinary:
        """Return the highest-versioned binary available.

        Raises:
            NoVersionFoundError: If no binary was found.
        """
        ...


@runtime_checkable
class DownloaderPort(Protocol):
    """Port interface for fetching kubectl from the upstream mirror.

    Contract:
        - fetch_binary() leaves either a complete, verified, executable file
          at destination or nothing at all
        - Checksum mismatch raises ShaMismatchError
        - Network or HTTP failures raise UpstreamUnavailableError
        - upstream_stable_version() never falls back to a hardcoded version
    """

    def fetch_binary(self, version: SemanticVersion, destination: Path) -> None:
        """Download kubectl ``version`` for the running platform to ``destination``.

        Raises:
            ShaMismatchError: If the artifact does not match its checksum.
            UpstreamUnavailableError: If the mirror cannot be reached.
        """
        ...

    def upstream_stable_version(self) -> SemanticVersion:
        """Return the version the mirror currently marks as stable.

        Raises:
            UpstreamUnavailableError: On network or parse failure.
        """
        ...


@runtime_checkable
class ClusterVersionProbePort(Protocol):
    """Port interface for asking the current cluster for its version.

    Contract:
        - version() returns the control plane version or raises
          ClusterProbeError
        - Raised errors implement TimeoutAware
        - version() never blocks longer than timeout_seconds on the network
    """

    def version(self, timeout_seconds: int) -> SemanticVersion:
        """Return the control plane version.

        Args:
            timeout_seconds: Upper bound for the request.

        Raises:
            ProbeTimeoutError: If the cluster is unreachable or too slow.
            ProbeFailureError: For any other failure.
        """
        ...


@runtime_checkable
class VersionQueryPort(Protocol):
    """Port interface for asking a kubectl binary which version it is.

    Contract:
        - client_version(path) runs the binary's client version query
        - Raises VersionParseError if the output has no usable version
        - Raises OSError or subprocess errors if the binary cannot run
    """

    def client_version(self, path: Path) -> SemanticVersion:
        """Return the client version reported by the binary at ``path``."""
        ...


@runtime_checkable
class PlatformDetectorPort(Protocol):
    """Port interface for detecting the running OS and architecture.

    Contract:
        - detect() returns a Platform named the way the release mirror names it
        - Raises KubectlConfigError on unsupported platforms
    """

    def detect(self) -> Platform:
        """Detect the current platform."""
        ...


@runtime_checkable
class ProcessReplacerPort(Protocol):
    """Port interface for handing the process over to the resolved binary.

    Contract:
        - replace() does not return on success; the binary's stdio and exit
          status become the process's
        - Raises ProcessReplaceError if the binary cannot be executed
    """

    def replace(
        self,
        binary_path: Path,
        args: Sequence[str],
        env: Mapping[str, str],
    ) -> NoReturn:
        """Replace the current process with ``binary_path``.

        Args:
            binary_path: The kubectl binary to run.
            args: Arguments forwarded verbatim (without argv[0]).
            env: Environment for the new process image.
        """
        ...
