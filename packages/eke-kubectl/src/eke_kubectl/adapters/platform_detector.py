"""Platform detector adapter for detecting current OS and architecture.

This module provides an adapter that implements PlatformDetectorPort
by using Python's standard library platform module.
"""

from __future__ import annotations

import os
import platform

from eke_kubectl.domain.binary import Platform
from eke_kubectl.domain.exceptions import KubectlConfigError


class OsPlatformDetector:
    """Adapter that detects the current platform using platform module.

    Implements PlatformDetectorPort by querying platform.system() and
    platform.machine() and mapping them to the names the kubernetes
    release mirror uses.

    The ``EKE_KUBECTL_ARCH`` environment variable overrides the detected
    architecture (e.g. to fetch amd64 binaries under Rosetta).
    """

    _OS_MAP: dict[str, str] = {
        "linux": "linux",
        "darwin": "darwin",
        "windows": "windows",
    }

    _ARCH_MAP: dict[str, str] = {
        "x86_64": "amd64",
        "amd64": "amd64",
        "aarch64": "arm64",
        "arm64": "arm64",
        "i386": "386",
        "i686": "386",
        "x86": "386",
        "armv7l": "arm",
        "armv6l": "arm",
        "ppc64le": "ppc64le",
        "s390x": "s390x",
    }

    def detect(self) -> Platform:
        """Detect the current platform.

        Returns:
            Platform value object with os and arch fields.

        Raises:
            KubectlConfigError: If the current OS or architecture is not supported.
        """
        return Platform(os=self._detect_os(), arch=self._detect_arch())

    def _detect_os(self) -> str:
        system = platform.system().lower()
        # MINGW64_NT-10.0, MSYS_NT-10.0, CYGWIN_NT-10.0
        if system.startswith(("mingw", "msys", "cygwin")):
            return "windows"
        if system not in self._OS_MAP:
            raise KubectlConfigError(
                f"Unsupported operating system: {platform.system()!r}. "
                f"Supported: linux, darwin, windows"
            )
        return self._OS_MAP[system]

    def _detect_arch(self) -> str:
        override = os.environ.get("EKE_KUBECTL_ARCH")
        if override:
            return override
        machine = platform.machine().lower()
        if machine not in self._ARCH_MAP:
            raise KubectlConfigError(
                f"Unsupported architecture: {platform.machine()!r}. "
                f"Supported: {', '.join(sorted(self._ARCH_MAP))}"
            )
        return self._ARCH_MAP[machine]
