"""Factory functions for wiring production adapters from settings.

The CLI builds everything through these functions; tests build the same
use cases from fakes instead.
"""

from __future__ import annotations

from eke_kubectl.adapters.filesystem_binary_locator import FilesystemBinaryLocator
from eke_kubectl.adapters.httpx_kubectl_downloader import HttpxKubectlDownloader
from eke_kubectl.adapters.kubernetes_version_probe import KubernetesVersionProbe
from eke_kubectl.adapters.local_cache import LocalCache
from eke_kubectl.adapters.platform_detector import OsPlatformDetector
from eke_kubectl.adapters.ports import PlatformDetectorPort, ProcessReplacerPort
from eke_kubectl.adapters.process_replacer import ExecProcessReplacer
from eke_kubectl.adapters.subprocess_version_query import SubprocessVersionQuery
from eke_kubectl.domain.settings import KubectlSettings
from eke_kubectl.usecases.kubectl_wrapper import KubectlWrapper
from eke_kubectl.usecases.version_resolver import VersionResolver


def create_local_cache(
    settings: KubectlSettings,
    platform_detector: PlatformDetectorPort | None = None,
) -> LocalCache:
    """Create the local cache for the running platform.

    Raises:
        KubectlConfigError: If the platform is not supported.
    """
    detector = platform_detector or OsPlatformDetector()
    return LocalCache(platform=detector.detect(), directory=settings.cache_dir)


def create_binary_locator(settings: KubectlSettings, cache: LocalCache) -> FilesystemBinaryLocator:
    return FilesystemBinaryLocator(
        version_query=SubprocessVersionQuery(),
        cache=cache,
        system_dirs=settings.system_dirs,
    )


def create_downloader(settings: KubectlSettings, cache: LocalCache) -> HttpxKubectlDownloader:
    return HttpxKubectlDownloader(
        platform=cache.platform,
        mirror_url=settings.mirror_url,
        timeout=settings.download_timeout,
    )


def create_version_resolver(
    settings: KubectlSettings,
    platform_detector: PlatformDetectorPort | None = None,
) -> VersionResolver:
    """Create a VersionResolver backed by the production adapters.

    Args:
        settings: Loaded kubectl settings.
        platform_detector: Optional detector override (testing).

    Returns:
        A VersionResolver probing the cluster named by the settings'
        kubeconfig and context.
    """
    cache = create_local_cache(settings, platform_detector)
    return VersionResolver(
        locator=create_binary_locator(settings, cache),
        downloader=create_downloader(settings, cache),
        probe=KubernetesVersionProbe(kubeconfig=settings.kubeconfig, context=settings.context),
        cache=cache,
    )


def create_kubectl_wrapper(
    settings: KubectlSettings,
    resolver: VersionResolver | None = None,
    replacer: ProcessReplacerPort | None = None,
) -> KubectlWrapper:
    """Create the wrapper that resolves kubectl and hands the process over.

    The resolver and replacer default to the production ones; the CLI passes
    the ones it already holds.
    """
    return KubectlWrapper(
        resolver=resolver if resolver is not None else create_version_resolver(settings),
        replacer=replacer if replacer is not None else ExecProcessReplacer(),
        settings=settings,
    )
