"""HTTPX-based implementation of the DownloaderPort.

This adapter uses httpx to download kubectl from the kubernetes release
mirror and to read the mirror's stable release pointer.
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
import tempfile
from contextlib import nullcontext
from pathlib import Path
from typing import BinaryIO, ContextManager

import httpx

from eke_kubectl.adapters.ports import DownloaderPort
from eke_kubectl.domain.binary import KUBECTL_BINARY_NAME, Platform
from eke_kubectl.domain.exceptions import (
    ShaMismatchError,
    UpstreamUnavailableError,
    VersionParseError,
)
from eke_kubectl.domain.settings import DEFAULT_DOWNLOAD_TIMEOUT, DEFAULT_MIRROR_URL
from eke_kubectl.domain.version import SemanticVersion

logger = logging.getLogger(__name__)

_SHA256_RE = re.compile(r"^[0-9a-f]{64}$")
_CHUNK_SIZE = 64 * 1024


class HttpxKubectlDownloader:
    """HTTPX-based adapter for downloading kubectl.

    Artifacts are addressed as ``<mirror>/<tag>/bin/<os>/<arch>/kubectl``
    with the SHA-256 published next to them as ``<artifact>.sha256``.
    The body is streamed to a temporary file in the destination directory
    and only renamed onto the destination once the checksum matches, so
    readers never see a partial binary under the final name.

    Attributes:
        platform: Platform whose binaries are fetched.
        mirror_url: Base URL of the release mirror.
    """

    def __init__(
        self,
        platform: Platform,
        mirror_url: str = DEFAULT_MIRROR_URL,
        timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the HTTPX kubectl downloader.

        Args:
            platform: Target platform for the binary.
            mirror_url: Base URL of the kubernetes release mirror.
            timeout: Timeout in seconds applied to every request.
            client: Optional httpx.Client for dependency injection (testing).
                   If not provided, a new client is created per operation.
        """
        self.platform = platform
        self.mirror_url = mirror_url.rstrip("/")
        self._timeout = httpx.Timeout(timeout)
        self._client = client

    def artifact_url(self, version: SemanticVersion) -> str:
        return (
            f"{self.mirror_url}/{version.tag}/bin/{self.platform.os}/"
            f"{self.platform.arch}/{KUBECTL_BINARY_NAME}{self.platform.executable_suffix}"
        )

    def fetch_binary(self, version: SemanticVersion, destination: Path) -> None:
        """Download kubectl ``version`` to ``destination``.

        Raises:
            ShaMismatchError: If the artifact does not match its checksum.
                Nothing is written to ``destination``.
            UpstreamUnavailableError: For network and HTTP failures.
            OSError: For filesystem errors.
        """
        destination = Path(destination)
        url = self.artifact_url(version)
        destination.parent.mkdir(parents=True, exist_ok=True)

        with self._session() as client:
            expected = self._fetch_checksum(client, url)

            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
            )
            tmp_path = Path(tmp_name)
            try:
                logger.info("downloading kubectl %s from %s", version, url)
                with os.fdopen(fd, "wb") as fh:
                    actual = self._stream_to(client, url, fh)
                    fh.flush()
                    os.fsync(fh.fileno())

                if actual != expected:
                    raise ShaMismatchError(url=url, sha_expected=expected, sha_actual=actual)

                tmp_path.chmod(0o755)
                os.replace(tmp_path, destination)
            finally:
                tmp_path.unlink(missing_ok=True)

        logger.info("kubectl %s saved to %s", version, destination)

    def upstream_stable_version(self) -> SemanticVersion:
        """Return the version published at ``<mirror>/stable.txt``.

        Raises:
            UpstreamUnavailableError: On network, HTTP or parse failure.
        """
        url = f"{self.mirror_url}/stable.txt"
        with self._session() as client:
            body = self._get_text(client, url)

        try:
            version = SemanticVersion.parse(body.strip())
        except VersionParseError as e:
            raise UpstreamUnavailableError(
                f"upstream stable release pointer returned an invalid version: {body.strip()[:64]!r}",
                url=url,
                original_error=e,
            ) from e
        logger.debug("upstream stable kubectl version is %s", version)
        return version

    def _session(self) -> ContextManager[httpx.Client]:
        if self._client is not None:
            return nullcontext(self._client)
        return httpx.Client(timeout=self._timeout, follow_redirects=True)

    def _fetch_checksum(self, client: httpx.Client, artifact_url: str) -> str:
        checksum_url = f"{artifact_url}.sha256"
        body = self._get_text(client, checksum_url)
        tokens = body.split()
        checksum = tokens[0].lower() if tokens else ""
        if not _SHA256_RE.match(checksum):
            raise UpstreamUnavailableError(
                f"malformed checksum published at {checksum_url}", url=checksum_url
            )
        return checksum

    def _get_text(self, client: httpx.Client, url: str) -> str:
        try:
            response = client.get(url, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(
                f"failed to fetch {url}: {e}", url=url, original_error=e
            ) from e
        return response.text

    def _stream_to(self, client: httpx.Client, url: str, fh: BinaryIO) -> str:
        digest = hashlib.sha256()
        try:
            with client.stream("GET", url, timeout=self._timeout) as response:
                response.raise_for_status()
                for chunk in response.iter_bytes(_CHUNK_SIZE):
                    digest.update(chunk)
                    fh.write(chunk)
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(
                f"failed to download {url}: {e}", url=url, original_error=e
            ) from e
        return digest.hexdigest()


# Runtime protocol check
assert isinstance(
    HttpxKubectlDownloader(platform=Platform(os="linux", arch="amd64")),
    DownloaderPort,
)
