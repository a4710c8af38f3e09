"""eke-kubectl: run the kubectl that matches the cluster you are talking to."""

__version__ = "0.1.0"

from eke_kubectl.domain.settings import KubectlSettings
from eke_kubectl.domain.exceptions import EkeKubectlError, KubectlConfigError
from eke_kubectl.domain.version import SemanticVersion
from eke_kubectl.usecases.config_loader import ConfigLoader
from eke_kubectl.usecases.version_resolver import VersionResolver

__all__ = [
    "KubectlSettings",
    "EkeKubectlError",
    "KubectlConfigError",
    "SemanticVersion",
    "ConfigLoader",
    "VersionResolver",
]
