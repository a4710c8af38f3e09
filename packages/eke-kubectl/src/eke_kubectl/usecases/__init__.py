"""Use cases: orchestration of ports into the kubectl resolution workflow."""

from eke_kubectl.usecases.config_loader import ConfigLoader, default_search_paths
from eke_kubectl.usecases.kubectl_wrapper import KubectlWrapper
from eke_kubectl.usecases.version_resolver import ResolutionState, VersionResolver

__all__ = [
    "ConfigLoader",
    "default_search_paths",
    "KubectlWrapper",
    "ResolutionState",
    "VersionResolver",
]
