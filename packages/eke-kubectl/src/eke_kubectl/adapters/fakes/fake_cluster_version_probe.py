"""Fake cluster version probe for testing."""

from __future__ import annotations

from eke_kubectl.domain.version import SemanticVersion


class FakeClusterVersionProbe:
    """Fake implementation of ClusterVersionProbePort for testing.

    Returns the configured version, or raises the configured error.
    Every call's timeout is recorded.

    Example:
        >>> from eke_kubectl.domain.exceptions import ProbeTimeoutError
        >>> fake = FakeClusterVersionProbe(error=ProbeTimeoutError("down"))
        >>> fake.version(5)
        Traceback (most recent call last):
        ...
        eke_kubectl.domain.exceptions.ProbeTimeoutError: down
    """

    def __init__(
        self,
        version: SemanticVersion | None = None,
        error: BaseException | None = None,
    ) -> None:
        self._version = version
        self._error = error
        self.timeouts: list[int] = []

    @classmethod
    def reporting(cls, version: str) -> FakeClusterVersionProbe:
        return cls(version=SemanticVersion.parse(version))

    @property
    def call_count(self) -> int:
        return len(self.timeouts)

    def set_version(self, version: SemanticVersion) -> None:
        self._version = version
        self._error = None

    def set_error(self, error: BaseException) -> None:
        self._error = error

    def version(self, timeout_seconds: int) -> SemanticVersion:
        self.timeouts.append(timeout_seconds)

        if self._error is not None:
            raise self._error
        if self._version is None:
            raise AssertionError("FakeClusterVersionProbe has neither version nor error")
        return self._version
