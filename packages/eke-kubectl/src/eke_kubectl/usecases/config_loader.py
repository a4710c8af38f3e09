"""Config loader use case for the eke kubectl command.

Settings come from ``eke.cmd.yaml`` files under the ``ekeKubectlConfig``
key, read in search-path order so that a later file overrides an earlier
one key by key, followed by ``EKE_KUBECTL_*`` environment variables.

Example ``~/.eke/eke.cmd.yaml``::

    ekeKubectlConfig:
      allowDownload: false
      systemPath: /opt/kubectl/bin
      timeout: 3
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml

from eke_kubectl.domain.exceptions import KubectlConfigError
from eke_kubectl.domain.settings import KubectlSettings

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "eke.cmd.yaml"
CONFIG_SECTION = "ekeKubectlConfig"

# camelCase file keys to KubectlSettings fields
_FILE_KEYS: dict[str, str] = {
    "allowDownload": "allow_download",
    "systemPath": "system_path",
    "timeout": "timeout",
    "downloadTimeout": "download_timeout",
    "mirrorUrl": "mirror_url",
    "cacheDir": "cache_dir",
    "kubeconfig": "kubeconfig",
    "context": "context",
}

_ENV_KEYS: dict[str, str] = {
    "EKE_KUBECTL_ALLOW_DOWNLOAD": "allow_download",
    "EKE_KUBECTL_TIMEOUT": "timeout",
    "EKE_KUBECTL_MIRROR_URL": "mirror_url",
    "EKE_KUBECTL_CACHE_DIR": "cache_dir",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def default_search_paths() -> list[Path]:
    """Return the directories searched for eke.cmd.yaml, lowest priority first."""
    home = Path.home() / ".eke"
    if sys.platform == "win32":
        program_data = os.environ.get("ProgramData", r"C:\ProgramData")
        return [Path(program_data) / "eke", home]
    return [Path("/usr/etc"), Path("/etc"), home]


class ConfigLoader:
    """Builds KubectlSettings from layered YAML files and the environment.

    Missing files are skipped. A file whose ``ekeKubectlConfig`` section is
    absent or empty contributes nothing. Unknown keys are ignored with a
    debug log so newer config files keep working with older releases.
    """

    def __init__(
        self,
        search_paths: Sequence[Path] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the config loader.

        Args:
            search_paths: Directories holding eke.cmd.yaml, lowest priority
                first. Defaults to default_search_paths().
            environ: Environment to read overrides from. Defaults to os.environ.
        """
        self._search_paths = (
            list(search_paths) if search_paths is not None else default_search_paths()
        )
        self._environ = environ if environ is not None else os.environ

    def load(self) -> KubectlSettings:
        """Load settings from every config file and the environment.

        Raises:
            KubectlConfigError: If a file is not valid YAML, is not a mapping,
                or produces invalid settings.
        """
        values: dict[str, Any] = {}
        for directory in self._search_paths:
            path = Path(directory).expanduser() / CONFIG_FILENAME
            if not path.is_file():
                continue
            logger.debug("reading kubectl settings from %s", path)
            values.update(self._read_file(path))

        values.update(self._read_environ())
        return self._build(values)

    def parse(self, yaml_str: str, source: str = "<string>") -> dict[str, Any]:
        """Parse one config document into KubectlSettings field values.

        Args:
            yaml_str: The YAML document.
            source: Name used in error messages.

        Returns:
            Field name to raw value for the keys present in the document.

        Raises:
            KubectlConfigError: If the YAML is invalid or not a mapping.
        """
        try:
            document = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise KubectlConfigError(f"Invalid YAML in {source}: {e}") from e

        if document is None:
            return {}
        if not isinstance(document, dict):
            raise KubectlConfigError(f"{source}: config must be a mapping")

        section = document.get(CONFIG_SECTION)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise KubectlConfigError(f"{source}: {CONFIG_SECTION} must be a mapping")

        values: dict[str, Any] = {}
        for key, value in section.items():
            field = _FILE_KEYS.get(key)
            if field is None:
                logger.debug("ignoring unknown key %s.%s in %s", CONFIG_SECTION, key, source)
                continue
            values[field] = value
        return values

    def _read_file(self, path: Path) -> dict[str, Any]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise KubectlConfigError(f"cannot read {path}: {e}") from e
        return self.parse(text, source=str(path))

    def _read_environ(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name, field in _ENV_KEYS.items():
            raw = self._environ.get(name)
            if raw is None or raw == "":
                continue
            if field == "allow_download":
                values[field] = _parse_bool(name, raw)
            elif field == "timeout":
                values[field] = _parse_int(name, raw)
            else:
                values[field] = raw
        return values

    @staticmethod
    def _build(values: dict[str, Any]) -> KubectlSettings:
        if "allow_download" in values and not isinstance(values["allow_download"], bool):
            raise KubectlConfigError(
                f"allowDownload must be true or false, got: {values['allow_download']!r}"
            )
        if "system_path" in values:
            system_path = values["system_path"]
            if isinstance(system_path, list):
                values["system_path"] = os.pathsep.join(str(entry) for entry in system_path)
            elif system_path is None:
                values["system_path"] = ""
            else:
                values["system_path"] = str(system_path)
        if values.get("cache_dir") is not None:
            values["cache_dir"] = Path(str(values["cache_dir"])).expanduser()
        for optional in ("kubeconfig", "context"):
            if values.get(optional) is not None:
                values[optional] = str(values[optional])

        try:
            return KubectlSettings(**values)
        except TypeError as e:
            raise KubectlConfigError(f"invalid kubectl settings: {e}") from e


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise KubectlConfigError(f"{name} must be a boolean, got: {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise KubectlConfigError(f"{name} must be an integer, got: {raw!r}") from e
