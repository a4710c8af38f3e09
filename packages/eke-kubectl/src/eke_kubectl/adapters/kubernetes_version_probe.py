"""Cluster version probe backed by the official kubernetes client.

Implements ClusterVersionProbePort by calling the ``/version`` endpoint of
the API server selected by the current kubeconfig context.
"""

from __future__ import annotations

import logging

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError, MaxRetryError, NewConnectionError
from urllib3.exceptions import TimeoutError as Urllib3TimeoutError

from eke_kubectl.domain.exceptions import (
    ClusterProbeError,
    ProbeFailureError,
    ProbeTimeoutError,
    VersionParseError,
)
from eke_kubectl.domain.version import SemanticVersion

logger = logging.getLogger(__name__)


class KubernetesVersionProbe:
    """Asks the API server for its version.

    kubeconfig loading follows the kubernetes client's rules (``KUBECONFIG``,
    then ``~/.kube/config``); when no kubeconfig is usable the in-cluster
    service account configuration is tried.

    Unreachable or slow API servers raise ProbeTimeoutError; everything else
    (authentication failures, bad kubeconfig, unexpected responses) raises
    ProbeFailureError.
    """

    def __init__(self, kubeconfig: str | None = None, context: str | None = None) -> None:
        """Initialize the probe.

        Args:
            kubeconfig: Path to a kubeconfig file. None uses the client default.
            context: kubeconfig context to use. None uses current-context.
        """
        self._kubeconfig = kubeconfig
        self._context = context

    def version(self, timeout_seconds: int) -> SemanticVersion:
        api_client = client.ApiClient(self._configuration())
        try:
            with api_client:
                info = client.VersionApi(api_client).get_code(
                    _request_timeout=timeout_seconds
                )
        except ApiException as e:
            raise ProbeFailureError(
                f"kubernetes API server rejected version request: {e.status} {e.reason}"
            ) from e
        except HTTPError as e:
            raise self._classify(e) from e

        try:
            return SemanticVersion.parse(info.git_version)
        except VersionParseError as e:
            raise ProbeFailureError(
                f"kubernetes API server reported an invalid version: {info.git_version!r}"
            ) from e

    def _configuration(self) -> client.Configuration:
        configuration = client.Configuration()
        try:
            config.load_kube_config(
                config_file=self._kubeconfig,
                context=self._context,
                client_configuration=configuration,
            )
        except (ConfigException, OSError, TypeError, ValueError) as kubeconfig_error:
            logger.debug("kubeconfig not usable (%s), trying in-cluster config", kubeconfig_error)
            configuration = client.Configuration()
            try:
                config.load_incluster_config(client_configuration=configuration)
            except ConfigException as e:
                raise ProbeFailureError(
                    f"no usable kubernetes configuration: {kubeconfig_error}"
                ) from e
        # A single attempt, so the request never outlives timeout_seconds.
        configuration.retries = False
        return configuration

    @staticmethod
    def _classify(error: HTTPError) -> ClusterProbeError:
        reason = error.reason if isinstance(error, MaxRetryError) else error
        if isinstance(reason, (Urllib3TimeoutError, NewConnectionError)):
            return ProbeTimeoutError(f"kubernetes API server unreachable: {reason}")
        return ProbeFailureError(f"kubernetes API server request failed: {reason}")
