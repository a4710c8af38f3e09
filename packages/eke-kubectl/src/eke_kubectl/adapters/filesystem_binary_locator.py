"""Filesystem binary locator adapter.

Implements BinaryLocatorPort by scanning system directories and the
local download cache for kubectl binaries. Does NOT download - only
finds existing binaries.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from pathlib import Path

from eke_kubectl.adapters.local_cache import LocalCache
from eke_kubectl.adapters.ports import VersionQueryPort
from eke_kubectl.domain.binary import (
    KUBECTL_BINARY_NAME,
    BinaryCollection,
    DiscoveredBinary,
)
from eke_kubectl.domain.exceptions import VersionParseError
from eke_kubectl.domain.version import SemanticVersion

logger = logging.getLogger(__name__)

# kubectl, kubectl.exe, kubectl1.20, kubectl-v1.21.3; not plugins like kubectl-neat
_SYSTEM_BINARY_RE = re.compile(
    rf"^{KUBECTL_BINARY_NAME}(?:[-_.]?v?\d[\w.+-]*)?(?:\.exe)?$", re.IGNORECASE
)


class FilesystemBinaryLocator:
    """Adapter that finds kubectl binaries on the filesystem.

    System binaries are executed once per scan to learn their version.
    Cached binaries are trusted to be what their filename says, since only
    the downloader writes to the cache.

    Scan failures for individual binaries are logged and skipped.
    """

    def __init__(
        self,
        version_query: VersionQueryPort,
        cache: LocalCache,
        system_dirs: list[Path] | None = None,
    ) -> None:
        """Initialize the locator.

        Args:
            version_query: Port used to ask system binaries for their version.
            cache: The local download cache.
            system_dirs: Directories to scan for system binaries. None means
                the entries of the PATH environment variable.
        """
        self._version_query = version_query
        self._cache = cache
        self._system_dirs = system_dirs

    def system_binaries(self) -> BinaryCollection:
        found: list[DiscoveredBinary] = []
        seen: set[Path] = set()
        cache_dir = self._cache.directory.resolve()

        for directory in self._get_system_dirs():
            for candidate in self._candidates(directory):
                resolved = candidate.resolve()
                if resolved in seen or resolved.parent == cache_dir:
                    continue
                seen.add(resolved)

                try:
                    version = self._version_query.client_version(candidate)
                except (OSError, subprocess.SubprocessError, VersionParseError) as e:
                    logger.warning("skipping kubectl binary %s: %s", candidate, e)
                    continue

                logger.debug("found system kubectl %s at %s", version, candidate)
                found.append(DiscoveredBinary(path=candidate.absolute(), version=version))

        return BinaryCollection(found)

    def local_binaries(self) -> BinaryCollection:
        return BinaryCollection(
            DiscoveredBinary(path=path, version=entry.version)
            for path, entry in self._cache.entries()
        )

    def all_binaries(self, reverse_sort: bool = False) -> BinaryCollection:
        try:
            system = self.system_binaries()
        except OSError as e:
            logger.warning("could not list system kubectl binaries: %s", e)
            system = BinaryCollection()

        try:
            local = self.local_binaries()
        except OSError as e:
            logger.warning("could not list cached kubectl binaries: %s", e)
            local = BinaryCollection()

        return (system + local).sorted(reverse=reverse_sort)

    def find_compatible(self, requested: SemanticVersion) -> DiscoveredBinary:
        chosen = self.all_binaries().find_compatible(requested)
        logger.debug(
            "kubectl %s at %s is compatible with %s", chosen.version, chosen.path, requested
        )
        return chosen

    def most_recent_available(self) -> DiscoveredBinary:
        return self.all_binaries().most_recent()

    def _get_system_dirs(self) -> list[Path]:
        if self._system_dirs is not None:
            return self._system_dirs

        path_env = os.environ.get("PATH", "")
        return [Path(entry) for entry in path_env.split(os.pathsep) if entry]

    @staticmethod
    def _candidates(directory: Path) -> list[Path]:
        if not directory.is_dir():
            return []
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            logger.warning("cannot list %s: %s", directory, e)
            return []

        return [
            path
            for path in entries
            if _SYSTEM_BINARY_RE.match(path.name)
            and path.is_file()
            and os.access(path, os.X_OK)
        ]
