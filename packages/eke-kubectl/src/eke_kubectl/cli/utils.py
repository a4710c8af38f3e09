"""CLI utilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from eke_kubectl.adapters.ports import ProcessReplacerPort
from eke_kubectl.adapters.process_replacer import ExecProcessReplacer
from eke_kubectl.domain.settings import KubectlSettings
from eke_kubectl.factories import create_version_resolver
from eke_kubectl.usecases.config_loader import ConfigLoader
from eke_kubectl.usecases.version_resolver import VersionResolver


@dataclass
class CliContext:
    """Object passed between commands through ``click.Context.obj``.

    Tests inject their own instance with ``CliRunner.invoke(obj=...)`` to
    swap production adapters for fakes.
    """

    debug: bool = False
    verbose: bool = False
    config_loader: ConfigLoader = field(default_factory=ConfigLoader)
    resolver_factory: Callable[[KubectlSettings], VersionResolver] = create_version_resolver
    replacer: ProcessReplacerPort = field(default_factory=ExecProcessReplacer)

    def load_settings(self) -> KubectlSettings:
        return self.config_loader.load()
