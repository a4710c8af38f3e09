"""kubectl wrapper use case: resolve a binary, then become it."""

from __future__ import annotations

import logging
import os
from typing import Mapping, NoReturn, Sequence

from eke_kubectl.adapters.ports import ProcessReplacerPort
from eke_kubectl.domain.settings import KubectlSettings
from eke_kubectl.usecases.version_resolver import VersionResolver

logger = logging.getLogger(__name__)


class KubectlWrapper:
    """Runs the kubectl matching the current cluster with the given arguments.

    Arguments are forwarded verbatim, including ``--help`` and anything
    after ``--``.
    """

    def __init__(
        self,
        resolver: VersionResolver,
        replacer: ProcessReplacerPort,
        settings: KubectlSettings,
    ) -> None:
        self._resolver = resolver
        self._replacer = replacer
        self._settings = settings

    def __call__(
        self,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> NoReturn:
        """Resolve kubectl and replace the current process with it.

        Args:
            args: Arguments for kubectl, without argv[0].
            env: Environment for kubectl. Defaults to ``os.environ``.

        Raises:
            EkeKubectlError: If no binary could be resolved or executed.
        """
        binary_path = self._resolver.resolve_and_ensure(
            timeout_seconds=self._settings.timeout,
            allow_download=self._settings.allow_download,
        )
        logger.debug("running %s with %d argument(s)", binary_path, len(args))
        self._replacer.replace(binary_path, list(args), os.environ if env is None else env)
