"""Domain exceptions.

Exception hierarchy:
- EkeKubectlError: Base exception for everything raised by this package.
  - KubectlConfigError: Invalid settings, config files or unsupported platform.
  - VersionParseError: Malformed version string (also a ValueError).
  - BinaryNotFoundError: The locator could not satisfy a lookup.
    - NoCompatibleBinaryError: Nothing inside the version-skew window.
    - NoVersionFoundError: No kubectl binary found at all.
  - DownloadDisabledError: A download was needed but downloads are disabled.
  - BinaryDownloadError: Fetching from the upstream mirror failed.
    - ShaMismatchError: Downloaded artifact failed checksum verification.
    - UpstreamUnavailableError: Mirror unreachable or returned garbage.
  - ClusterProbeError: Asking the cluster for its version failed.
    - ProbeTimeoutError: Cluster unreachable or too slow.
    - ProbeFailureError: Any other probe failure (auth, bad response, ...).
  - ProcessReplaceError: The resolved binary could not be executed.

The CLI catches EkeKubectlError, prints the message on stderr and exits
non-zero. Nothing below retries on its own.
"""

from __future__ import annotations


class EkeKubectlError(Exception):
    """Base exception for kubectl resolution and provisioning errors."""

    pass


class KubectlConfigError(EkeKubectlError):
    """Raised when kubectl wrapper configuration is invalid.

    Raised by domain entities (e.g., KubectlSettings, Platform) and use cases
    (e.g., ConfigLoader) when validation fails.
    """

    pass


class VersionParseError(EkeKubectlError, ValueError):
    """Raised when a version string cannot be parsed.

    Attributes:
        version_string: The offending input.
    """

    def __init__(self, message: str, version_string: str | None = None) -> None:
        super().__init__(message)
        self.version_string = version_string


class BinaryNotFoundError(EkeKubectlError):
    """Base class for locator lookups that found nothing usable."""

    pass


class NoCompatibleBinaryError(BinaryNotFoundError):
    """Raised when no kubectl binary falls inside the version-skew window.

    Attributes:
        requested: The version the lookup was made for.
    """

    def __init__(self, requested: object) -> None:
        super().__init__(f"no kubectl binary compatible with version {requested} found")
        self.requested = requested


class NoVersionFoundError(BinaryNotFoundError):
    """Raised when no kubectl binary is available at all."""

    def __init__(self, message: str = "no kubectl binary found") -> None:
        super().__init__(message)


class DownloadDisabledError(EkeKubectlError):
    """Raised when the right kubectl is missing and downloads are disabled."""

    def __init__(self, version: object) -> None:
        super().__init__(
            f"the right kubectl ({version}) is missing, binary downloads from "
            "kubernetes' upstream mirror are disabled"
        )
        self.version = version


class BinaryDownloadError(EkeKubectlError):
    """Raised when binary download fails.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to download (optional).
        original_error: The underlying exception that caused the failure (optional).
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.original_error = original_error


class ShaMismatchError(BinaryDownloadError):
    """Raised when a downloaded artifact does not match its published checksum.

    Attributes:
        url: URL of the artifact.
        sha_expected: Checksum published by the mirror.
        sha_actual: Checksum of the bytes actually received.
    """

    def __init__(self, url: str, sha_expected: str, sha_actual: str) -> None:
        super().__init__(
            f"SHA mismatch for URL {url}: expected '{sha_expected}', got '{sha_actual}'",
            url=url,
        )
        self.sha_expected = sha_expected
        self.sha_actual = sha_actual


class UpstreamUnavailableError(BinaryDownloadError):
    """Raised when the upstream mirror cannot be reached or parsed."""

    pass


class ClusterProbeError(EkeKubectlError):
    """Raised when the cluster version cannot be determined.

    Subclasses answer timeout() so callers can tell an unreachable cluster
    from other faults without looking at the message.
    """

    def timeout(self) -> bool:
        """Return True if the failure was a timeout or unreachable cluster."""
        return False


class ProbeTimeoutError(ClusterProbeError):
    """Cluster did not answer in time or could not be reached."""

    def timeout(self) -> bool:
        return True


class ProbeFailureError(ClusterProbeError):
    """Cluster answered, or configuration prevented asking, but no version came back."""

    pass


class ProcessReplaceError(EkeKubectlError):
    """Raised when the resolved kubectl binary cannot be executed.

    Attributes:
        binary_path: The path that failed.
    """

    def __init__(self, message: str, binary_path: object = None) -> None:
        super().__init__(message)
        self.binary_path = binary_path
