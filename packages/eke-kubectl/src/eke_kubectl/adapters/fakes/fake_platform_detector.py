"""Fake platform detector for testing.

Stands in for OsPlatformDetector so cache naming and download URLs can be
exercised for any os/arch pair, including hosts the mirror has no kubectl
build for.
"""

from __future__ import annotations

from eke_kubectl.domain.binary import Platform
from eke_kubectl.domain.exceptions import KubectlConfigError


class FakePlatformDetector:
    """Fake implementation of PlatformDetectorPort for testing.

    Counts detect() calls so tests can check the platform is resolved once
    per wiring, not per download.

    Example:
        >>> fake = FakePlatformDetector.from_tuple("darwin", "arm64")
        >>> fake.detect()
        Platform(os='darwin', arch='arm64')
        >>> fake.detect_calls
        1
    """

    def __init__(self, platform: Platform | None, error: KubectlConfigError | None = None) -> None:
        self._platform = platform
        self._error = error
        self.detect_calls = 0

    @classmethod
    def from_tuple(cls, os: str, arch: str) -> FakePlatformDetector:
        """Create a detector for an os/arch pair without building a Platform."""
        return cls(Platform(os=os, arch=arch))

    @classmethod
    def unsupported(cls, system: str) -> FakePlatformDetector:
        """Create a detector for a host kubectl is not published for.

        detect() raises the same KubectlConfigError OsPlatformDetector
        raises for an unknown operating system.
        """
        return cls(
            None,
            KubectlConfigError(
                f"Unsupported operating system: {system!r}. Supported: linux, darwin, windows"
            ),
        )

    def detect(self) -> Platform:
        self.detect_calls += 1
        if self._error is not None:
            raise self._error
        assert self._platform is not None
        return self._platform
