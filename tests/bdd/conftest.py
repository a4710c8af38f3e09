"""Shared fixtures for BDD tests."""

import pytest
from pathlib import Path

from eke_kubectl.adapters.local_cache import LocalCache
from eke_kubectl.domain.binary import Platform


@pytest.fixture
def kubectl_cache(tmp_path: Path) -> LocalCache:
    """Create an empty local kubectl cache for linux/amd64.

    Returns:
        LocalCache rooted in a directory that does not exist yet.
    """
    return LocalCache(Platform(os="linux", arch="amd64"), tmp_path / "kubectl-cache")
