"""Interface adapters: ports plus their production implementations."""

from eke_kubectl.adapters.filesystem_binary_locator import FilesystemBinaryLocator
from eke_kubectl.adapters.httpx_kubectl_downloader import HttpxKubectlDownloader
from eke_kubectl.adapters.kubernetes_version_probe import KubernetesVersionProbe
from eke_kubectl.adapters.local_cache import LocalCache, default_cache_dir
from eke_kubectl.adapters.platform_detector import OsPlatformDetector
from eke_kubectl.adapters.ports import (
    BinaryLocatorPort,
    ClusterVersionProbePort,
    DownloaderPort,
    PlatformDetectorPort,
    ProcessReplacerPort,
    TimeoutAware,
    VersionQueryPort,
)
from eke_kubectl.adapters.process_replacer import ExecProcessReplacer
from eke_kubectl.adapters.subprocess_version_query import SubprocessVersionQuery

__all__ = [
    "BinaryLocatorPort",
    "ClusterVersionProbePort",
    "DownloaderPort",
    "PlatformDetectorPort",
    "ProcessReplacerPort",
    "TimeoutAware",
    "VersionQueryPort",
    "FilesystemBinaryLocator",
    "HttpxKubectlDownloader",
    "KubernetesVersionProbe",
    "LocalCache",
    "default_cache_dir",
    "OsPlatformDetector",
    "ExecProcessReplacer",
    "SubprocessVersionQuery",
]
