"""Fake downloader for testing.

Provides a test double for DownloaderPort that never touches the network.
"""

from __future__ import annotations

from pathlib import Path

from eke_kubectl.domain.exceptions import UpstreamUnavailableError
from eke_kubectl.domain.version import SemanticVersion


class FakeDownloader:
    """Fake implementation of DownloaderPort for testing.

    fetch_binary() records the request and, unless told otherwise, writes a
    small executable placeholder at the destination. upstream_stable_version()
    returns the configured version or raises UpstreamUnavailableError when
    none is configured.

    Example:
        >>> fake = FakeDownloader(stable=SemanticVersion.parse("1.22.0"))
        >>> str(fake.upstream_stable_version())
        '1.22.0'
    """

    def __init__(
        self,
        stable: SemanticVersion | None = None,
        write_files: bool = True,
    ) -> None:
        """Initialize the fake.

        Args:
            stable: Version returned by upstream_stable_version().
            write_files: Whether fetch_binary() creates the destination file.
        """
        self._stable = stable
        self._write_files = write_files
        self._fetch_exception: BaseException | None = None
        self._stable_exception: BaseException | None = None
        self._fetch_calls: list[tuple[SemanticVersion, Path]] = []
        self._stable_calls = 0

    @property
    def fetch_calls(self) -> list[tuple[SemanticVersion, Path]]:
        """Return (version, destination) tuples from fetch_binary() calls."""
        return self._fetch_calls

    @property
    def stable_calls(self) -> int:
        """Return how often upstream_stable_version() was called."""
        return self._stable_calls

    @property
    def call_count(self) -> int:
        return len(self._fetch_calls) + self._stable_calls

    def set_stable(self, version: SemanticVersion | None) -> None:
        self._stable = version

    def set_fetch_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from fetch_binary(), or None to clear."""
        self._fetch_exception = exception

    def set_stable_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from upstream_stable_version()."""
        self._stable_exception = exception

    def fetch_binary(self, version: SemanticVersion, destination: Path) -> None:
        self._fetch_calls.append((version, Path(destination)))

        if self._fetch_exception is not None:
            raise self._fetch_exception

        if self._write_files:
            destination = Path(destination)
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(f"#!/bin/sh\necho kubectl {version.tag}\n")
            destination.chmod(0o755)

    def upstream_stable_version(self) -> SemanticVersion:
        self._stable_calls += 1

        if self._stable_exception is not None:
            raise self._stable_exception
        if self._stable is None:
            raise UpstreamUnavailableError("no stable version configured")
        return self._stable
