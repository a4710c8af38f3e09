"""Version resolver use case.

Decides which kubectl version to run and makes sure a binary for it is
on disk. The decision is a fallback chain:

    PROBE_CLUSTER -> DONE
                  -> PROBE_LOCAL -> DONE
                                 -> PROBE_UPSTREAM -> DONE
                                                   -> FAILED
                                 -> FAILED

The cluster's own version always wins. Without a reachable cluster the
newest binary already on the host is used, and only when there is none
at all is the mirror's stable release consulted.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from eke_kubectl.adapters.local_cache import LocalCache
from eke_kubectl.adapters.ports import (
    BinaryLocatorPort,
    ClusterVersionProbePort,
    DownloaderPort,
    TimeoutAware,
)
from eke_kubectl.domain.exceptions import (
    BinaryDownloadError,
    ClusterProbeError,
    DownloadDisabledError,
    EkeKubectlError,
    NoCompatibleBinaryError,
    NoVersionFoundError,
)
from eke_kubectl.domain.version import SemanticVersion

logger = logging.getLogger(__name__)


class ResolutionState(Enum):
    """States of the version_to_use() fallback chain."""

    PROBE_CLUSTER = "probe_cluster"
    PROBE_LOCAL = "probe_local"
    PROBE_UPSTREAM = "probe_upstream"
    DONE = "done"
    FAILED = "failed"


class VersionResolver:
    """Use case for choosing and provisioning the kubectl version to run.

    Coordinates three ports: the cluster probe, the binary locator and the
    downloader. The local cache decides where downloaded binaries go.

    Attributes:
        last_transitions: States visited by the most recent version_to_use()
            call, starting with PROBE_CLUSTER and ending in DONE or FAILED.
    """

    def __init__(
        self,
        locator: BinaryLocatorPort,
        downloader: DownloaderPort,
        probe: ClusterVersionProbePort,
        cache: LocalCache,
    ) -> None:
        """Initialize the version resolver.

        Args:
            locator: Port for finding binaries already on the host.
            downloader: Port for fetching binaries from the upstream mirror.
            probe: Port for asking the current cluster for its version.
            cache: Local download cache.
        """
        self._locator = locator
        self._downloader = downloader
        self._probe = probe
        self._cache = cache
        self.last_transitions: list[ResolutionState] = []

    @property
    def locator(self) -> BinaryLocatorPort:
        return self._locator

    def version_to_use(self, timeout_seconds: int) -> SemanticVersion:
        """Return the kubectl version that should be run.

        Args:
            timeout_seconds: Upper bound for the cluster version probe.

        Returns:
            The cluster's version, else the newest local binary's version,
            else the upstream stable version.

        Raises:
            ClusterProbeError: The original probe error, when neither local
                binaries nor the upstream mirror could stand in. The later
                failure is attached as ``__cause__``.
        """
        self.last_transitions = [ResolutionState.PROBE_CLUSTER]

        try:
            version = self._probe.version(timeout_seconds)
        except ClusterProbeError as probe_error:
            self._log_probe_failure(probe_error, timeout_seconds)
            return self._fallback(probe_error)

        logger.debug("cluster reports version %s", version)
        self._transition(ResolutionState.DONE)
        return version

    def ensure_available(self, version: SemanticVersion, allow_download: bool) -> Path:
        """Return the path of a binary able to talk to a ``version`` server.

        Args:
            version: Target server version.
            allow_download: Whether a missing binary may be downloaded.

        Returns:
            Path of an existing compatible binary, or of the freshly
            downloaded one in the local cache.

        Raises:
            DownloadDisabledError: If nothing compatible exists and downloads
                are disabled. The downloader is not called.
            BinaryDownloadError: Downloader failures, unchanged.
        """
        try:
            binary = self._locator.find_compatible(version)
        except NoCompatibleBinaryError:
            logger.debug("no local kubectl compatible with %s", version)
        else:
            return binary.path

        if not allow_download:
            raise DownloadDisabledError(version)

        logger.info("kubectl %s not found locally, downloading it", version)
        return self.download(version)

    def download(self, version: SemanticVersion) -> Path:
        """Fetch ``version`` into the local cache and return its path.

        Downloads unconditionally, replacing any cached copy.
        """
        self._cache.ensure()
        destination = self._cache.path_for(version)
        self._downloader.fetch_binary(version, destination)
        return destination

    def resolve_and_ensure(self, timeout_seconds: int, allow_download: bool) -> Path:
        """Resolve the version to use and return a binary path for it."""
        version = self.version_to_use(timeout_seconds)
        return self.ensure_available(version, allow_download)

    def _fallback(self, probe_error: ClusterProbeError) -> SemanticVersion:
        self._transition(ResolutionState.PROBE_LOCAL)
        try:
            binary = self._locator.most_recent_available()
        except NoVersionFoundError:
            logger.debug("no kubectl binary available locally")
        except (EkeKubectlError, OSError) as locator_error:
            self._transition(ResolutionState.FAILED)
            raise probe_error from locator_error
        else:
            logger.info("using most recent local kubectl %s", binary.version)
            self._transition(ResolutionState.DONE)
            return binary.version

        self._transition(ResolutionState.PROBE_UPSTREAM)
        try:
            version = self._downloader.upstream_stable_version()
        except (BinaryDownloadError, OSError) as upstream_error:
            self._transition(ResolutionState.FAILED)
            raise probe_error from upstream_error

        logger.info("using upstream stable kubectl %s", version)
        self._transition(ResolutionState.DONE)
        return version

    def _transition(self, state: ResolutionState) -> None:
        self.last_transitions.append(state)

    @staticmethod
    def _log_probe_failure(error: ClusterProbeError, timeout_seconds: int) -> None:
        if isinstance(error, TimeoutAware) and error.timeout():
            logger.warning(
                "cluster did not answer within %ss, falling back to local kubectl: %s",
                timeout_seconds,
                error,
            )
        else:
            logger.warning("could not get cluster version, falling back to local kubectl: %s", error)
