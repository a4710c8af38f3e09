"""Fake binary locator for testing.

Provides a test double for BinaryLocatorPort backed by in-memory binary
lists. Selection (compatibility window, most recent) uses the same
BinaryCollection rules as the filesystem locator.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from eke_kubectl.domain.binary import BinaryCollection, DiscoveredBinary
from eke_kubectl.domain.version import SemanticVersion


class FakeBinaryLocator:
    """Fake implementation of BinaryLocatorPort for testing.

    Holds system and local binaries in memory, records every call and can
    be told to raise from any method.

    Example:
        >>> fake = FakeBinaryLocator.with_versions(local=["1.20.0"])
        >>> str(fake.most_recent_available().version)
        '1.20.0'
        >>> fake.calls
        ['most_recent_available']
    """

    def __init__(
        self,
        system: Iterable[DiscoveredBinary] = (),
        local: Iterable[DiscoveredBinary] = (),
    ) -> None:
        """Initialize with the binaries to report.

        Args:
            system: Binaries returned by system_binaries().
            local: Binaries returned by local_binaries().
        """
        self._system = list(system)
        self._local = list(local)
        self._exceptions: dict[str, BaseException] = {}
        self._calls: list[str] = []

    @classmethod
    def with_versions(
        cls,
        system: Iterable[str] = (),
        local: Iterable[str] = (),
    ) -> FakeBinaryLocator:
        """Create a locator from version strings.

        System binaries live under ``/usr/local/bin``, local ones under
        ``/cache``, each named after its version.
        """
        return cls(
            system=[_binary(Path("/usr/local/bin"), v) for v in system],
            local=[_binary(Path("/cache"), v) for v in local],
        )

    @property
    def calls(self) -> list[str]:
        """Names of the methods called, in order."""
        return self._calls

    def set_exception(self, method: str, exception: BaseException | None) -> None:
        """Configure an exception to raise from ``method``, or None to clear."""
        if exception is None:
            self._exceptions.pop(method, None)
        else:
            self._exceptions[method] = exception

    def system_binaries(self) -> BinaryCollection:
        self._record("system_binaries")
        return BinaryCollection(self._system)

    def local_binaries(self) -> BinaryCollection:
        self._record("local_binaries")
        return BinaryCollection(self._local)

    def all_binaries(self, reverse_sort: bool = False) -> BinaryCollection:
        self._record("all_binaries")
        return self._all().sorted(reverse=reverse_sort)

    def find_compatible(self, requested: SemanticVersion) -> DiscoveredBinary:
        self._record("find_compatible")
        return self._all().sorted().find_compatible(requested)

    def most_recent_available(self) -> DiscoveredBinary:
        self._record("most_recent_available")
        return self._all().most_recent()

    def _all(self) -> BinaryCollection:
        return BinaryCollection(self._system) + BinaryCollection(self._local)

    def _record(self, method: str) -> None:
        self._calls.append(method)
        if method in self._exceptions:
            raise self._exceptions[method]


def _binary(directory: Path, version: str) -> DiscoveredBinary:
    parsed = SemanticVersion.parse(version)
    return DiscoveredBinary(path=directory / f"kubectl-{parsed.tag}", version=parsed)
