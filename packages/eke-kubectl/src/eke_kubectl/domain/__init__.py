"""Domain layer: Entities with zero external dependencies."""

from eke_kubectl.domain.binary import (
    BinaryCollection,
    CacheEntry,
    DiscoveredBinary,
    Platform,
    VERSION_SKEW,
)
from eke_kubectl.domain.exceptions import (
    BinaryDownloadError,
    ClusterProbeError,
    DownloadDisabledError,
    EkeKubectlError,
    KubectlConfigError,
    NoCompatibleBinaryError,
    NoVersionFoundError,
    ProbeFailureError,
    ProbeTimeoutError,
    ProcessReplaceError,
    ShaMismatchError,
    UpstreamUnavailableError,
    VersionParseError,
)
from eke_kubectl.domain.settings import KubectlSettings
from eke_kubectl.domain.version import SemanticVersion

__all__ = [
    "VERSION_SKEW",
    "BinaryCollection",
    "CacheEntry",
    "DiscoveredBinary",
    "Platform",
    "SemanticVersion",
    "KubectlSettings",
    "EkeKubectlError",
    "KubectlConfigError",
    "VersionParseError",
    "NoCompatibleBinaryError",
    "NoVersionFoundError",
    "DownloadDisabledError",
    "BinaryDownloadError",
    "ShaMismatchError",
    "UpstreamUnavailableError",
    "ClusterProbeError",
    "ProbeTimeoutError",
    "ProbeFailureError",
    "ProcessReplaceError",
]
