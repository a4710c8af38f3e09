"""Fake adapters for testing.

This module provides test doubles for port interfaces, enabling
deterministic testing without real I/O operations.
"""

from eke_kubectl.adapters.fakes.fake_binary_locator import FakeBinaryLocator
from eke_kubectl.adapters.fakes.fake_cluster_version_probe import FakeClusterVersionProbe
from eke_kubectl.adapters.fakes.fake_downloader import FakeDownloader
from eke_kubectl.adapters.fakes.fake_platform_detector import FakePlatformDetector
from eke_kubectl.adapters.fakes.fake_process_replacer import (
    FakeProcessReplacer,
    ProcessReplaced,
    ReplaceCall,
)
from eke_kubectl.adapters.fakes.fake_version_query import FakeVersionQuery

__all__ = [
    "FakeBinaryLocator",
    "FakeClusterVersionProbe",
    "FakeDownloader",
    "FakePlatformDetector",
    "FakeProcessReplacer",
    "FakeVersionQuery",
    "ProcessReplaced",
    "ReplaceCall",
]
