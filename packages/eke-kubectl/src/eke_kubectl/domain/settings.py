"""kubectl wrapper settings domain entity."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from eke_kubectl.domain.exceptions import KubectlConfigError

DEFAULT_MIRROR_URL = "https://dl.k8s.io/release"
DEFAULT_PROBE_TIMEOUT = 5
DEFAULT_DOWNLOAD_TIMEOUT = 60.0


@dataclass(frozen=True)
class KubectlSettings:
    """Settings for resolving and provisioning kubectl.

    Value object holding everything the resolver needs from configuration.
    Built by ConfigLoader from layered ``eke.cmd.yaml`` files.

    Attributes:
        allow_download: Whether missing binaries may be fetched from the mirror.
        system_path: ``os.pathsep`` separated directories to scan for system
            kubectl binaries. Empty means use ``PATH``.
        timeout: Seconds to wait for the cluster to report its version.
        download_timeout: Seconds allowed for each request to the mirror.
        mirror_url: Base URL of the kubernetes release mirror.
        cache_dir: Directory for downloaded binaries. None means the
            platform default user cache directory.
        kubeconfig: Optional kubeconfig path for the cluster version probe.
        context: Optional kubeconfig context for the cluster version probe.
    """

    allow_download: bool = True
    system_path: str = ""
    timeout: int = DEFAULT_PROBE_TIMEOUT
    download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT
    mirror_url: str = DEFAULT_MIRROR_URL
    cache_dir: Path | None = None
    kubeconfig: str | None = None
    context: str | None = None

    def __post_init__(self) -> None:
        """Validate settings."""
        self._validate_timeout()
        self._validate_download_timeout()
        self._validate_mirror_url()

    def _validate_timeout(self) -> None:
        # bool is an int subclass; reject it explicitly
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int):
            raise KubectlConfigError(
                f"timeout must be an integer number of seconds, got: {self.timeout!r}"
            )
        if self.timeout <= 0:
            raise KubectlConfigError(f"timeout must be > 0, got: {self.timeout}")

    def _validate_download_timeout(self) -> None:
        if isinstance(self.download_timeout, bool) or not isinstance(
            self.download_timeout, (int, float)
        ):
            raise KubectlConfigError(
                f"download_timeout must be a number, got: {self.download_timeout!r}"
            )
        if self.download_timeout <= 0:
            raise KubectlConfigError(
                f"download_timeout must be > 0, got: {self.download_timeout}"
            )

    def _validate_mirror_url(self) -> None:
        if not isinstance(self.mirror_url, str) or not self.mirror_url.startswith(
            ("http://", "https://")
        ):
            raise KubectlConfigError(
                f"mirror_url must be an http(s) URL, got: {self.mirror_url!r}"
            )

    @property
    def system_dirs(self) -> list[Path] | None:
        """Directories from system_path, or None to fall back to PATH."""
        if not self.system_path:
            return None
        return [Path(entry) for entry in self.system_path.split(os.pathsep) if entry]
