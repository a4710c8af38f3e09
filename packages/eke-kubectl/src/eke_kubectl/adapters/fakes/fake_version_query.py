"""Fake version query for testing.

Maps binary paths to versions (or errors) so the filesystem locator can be
tested against real files without executing them.
"""

from __future__ import annotations

from pathlib import Path

from eke_kubectl.domain.exceptions import VersionParseError
from eke_kubectl.domain.version import SemanticVersion


class FakeVersionQuery:
    """Fake implementation of VersionQueryPort for testing.

    Paths are matched by file name. Unknown names raise VersionParseError,
    the same thing a binary with unexpected output would produce.

    Example:
        >>> fake = FakeVersionQuery({"kubectl": "1.20.1"})
        >>> str(fake.client_version(Path("/usr/bin/kubectl")))
        '1.20.1'
    """

    def __init__(self, versions: dict[str, str | BaseException] | None = None) -> None:
        """Initialize with a name to version mapping.

        Args:
            versions: File name to version string, or to the exception that
                querying that binary should raise.
        """
        self._versions: dict[str, str | BaseException] = dict(versions or {})
        self.queried: list[Path] = []

    def set_version(self, name: str, version: str | BaseException) -> None:
        self._versions[name] = version

    def client_version(self, path: Path) -> SemanticVersion:
        self.queried.append(Path(path))

        result = self._versions.get(Path(path).name)
        if result is None:
            raise VersionParseError(f"no version known for {path}", version_string="")
        if isinstance(result, BaseException):
            raise result
        return SemanticVersion.parse(result)
