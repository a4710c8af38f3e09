"""Subprocess-based implementation of VersionQueryPort."""

from __future__ import annotations

import json
import re
import subprocess
from pathlib import Path

from eke_kubectl.domain.exceptions import VersionParseError
from eke_kubectl.domain.version import SemanticVersion

# Matches 'Client Version: v1.28.2' and 'GitVersion:"v1.20.1"' alike
_VERSION_IN_TEXT = re.compile(r"v(\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?)")


class SubprocessVersionQuery:
    """Runs ``kubectl version --client --output=json`` and parses the result.

    JSON output is preferred; very old kubectl releases that ignore
    ``--output`` print a Go struct dump instead, so the first ``vX.Y.Z``
    in plain output is accepted as a fallback.

    Attributes:
        timeout: Seconds to wait for the binary to answer.
    """

    VERSION_ARGS = ("version", "--client", "--output=json")

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout

    def client_version(self, path: Path) -> SemanticVersion:
        """Return the client version reported by the binary at ``path``.

        Raises:
            OSError: If the binary cannot be executed.
            subprocess.CalledProcessError: If it exits non-zero.
            subprocess.TimeoutExpired: If it does not answer in time.
            VersionParseError: If no version can be found in its output.
        """
        completed = subprocess.run(
            [str(path), *self.VERSION_ARGS],
            capture_output=True,
            text=True,
            timeout=self.timeout,
            check=True,
        )
        return self.parse_output(completed.stdout)

    @staticmethod
    def parse_output(output: str) -> SemanticVersion:
        """Extract the client version from ``kubectl version`` output."""
        try:
            document = json.loads(output)
        except json.JSONDecodeError:
            document = None

        if isinstance(document, dict):
            client_version = document.get("clientVersion")
            if isinstance(client_version, dict) and client_version.get("gitVersion"):
                return SemanticVersion.parse(client_version["gitVersion"])

        match = _VERSION_IN_TEXT.search(output)
        if match is None:
            raise VersionParseError(
                f"no client version found in kubectl output: {output.strip()[:200]!r}"
            )
        return SemanticVersion.parse(match.group(1))
