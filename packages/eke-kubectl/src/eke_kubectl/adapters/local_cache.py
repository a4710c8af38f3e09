"""Local download cache for kubectl binaries.

The cache is a single directory owned by this package, shared by every
process on the host. It is created on first use and never removed.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from eke_kubectl.domain.binary import CacheEntry, Platform
from eke_kubectl.domain.version import SemanticVersion

logger = logging.getLogger(__name__)


def default_cache_dir() -> Path:
    """Get the user cache directory for kubectl binaries.

    Returns platform-specific cache directory:
    - Linux: $XDG_CACHE_HOME/eke/kubectl or ~/.cache/eke/kubectl
    - macOS: ~/Library/Caches/eke/kubectl
    - Windows: %LOCALAPPDATA%\\eke\\kubectl
    """
    if sys.platform == "win32":
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            return Path(local_app_data) / "eke" / "kubectl"
        return Path.home() / "AppData" / "Local" / "eke" / "kubectl"

    home = Path(os.environ.get("HOME", "~")).expanduser()

    if sys.platform == "darwin":
        return home / "Library" / "Caches" / "eke" / "kubectl"

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / "eke" / "kubectl"

    return home / ".cache" / "eke" / "kubectl"


class LocalCache:
    """The managed directory holding downloaded kubectl binaries.

    Maps versions to deterministic CacheEntry paths. ``ensure()`` is the
    explicit create-if-absent initialization step; nothing else creates
    or removes the directory. Other processes may populate or empty it
    concurrently, so every lookup goes back to the filesystem.

    Attributes:
        directory: The cache directory.
        platform: Platform whose binaries this cache serves.
    """

    def __init__(self, platform: Platform, directory: Path | None = None) -> None:
        self.platform = platform
        self.directory = (directory or default_cache_dir()).expanduser().absolute()

    def ensure(self) -> Path:
        """Create the cache directory if it does not exist yet.

        Returns:
            The cache directory.
        """
        if not self.directory.is_dir():
            logger.debug("creating kubectl cache directory %s", self.directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def entry_for(self, version: SemanticVersion) -> CacheEntry:
        return CacheEntry(version=version, platform=self.platform)

    def path_for(self, version: SemanticVersion) -> Path:
        """Return where the binary for ``version`` lives (or will live)."""
        return self.directory / self.entry_for(version).filename

    def entries(self) -> list[tuple[Path, CacheEntry]]:
        """List cached binaries built for this cache's platform.

        Files not following the naming convention, and binaries for other
        platforms, are ignored. A missing directory yields an empty list.

        Raises:
            OSError: If the directory exists but cannot be listed.
        """
        if not self.directory.is_dir():
            return []

        found: list[tuple[Path, CacheEntry]] = []
        for path in sorted(self.directory.iterdir()):
            if not path.is_file():
                continue
            entry = CacheEntry.from_filename(path.name)
            if entry is None:
                logger.debug("ignoring unrecognised file in kubectl cache: %s", path)
                continue
            if entry.platform != self.platform:
                continue
            found.append((path, entry))
        return found
