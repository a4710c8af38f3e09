"""Pytest configuration for core adapter unit tests."""

from __future__ import annotations

import hashlib

import httpx
import pytest

from eke_kubectl.domain.binary import Platform

MIRROR_URL = "https://mirror.test/release"


class FakeMirror:
    """In-memory release mirror served through httpx.MockTransport.

    Example:
        def test_download(fake_mirror):
            fake_mirror.add_release("v1.20.1", b"binary")
            client = fake_mirror.client()
    """

    def __init__(self, platform: Platform, base_url: str = MIRROR_URL) -> None:
        self.platform = platform
        self.base_url = base_url
        self.responses: dict[str, tuple[int, bytes] | Exception] = {}
        self.requests: list[str] = []

    def add(self, url: str, body: bytes | str | Exception, status: int = 200) -> None:
        if isinstance(body, Exception):
            self.responses[url] = body
        else:
            self.responses[url] = (status, body.encode() if isinstance(body, str) else body)

    def artifact_url(self, tag: str) -> str:
        suffix = self.platform.executable_suffix
        return f"{self.base_url}/{tag}/bin/{self.platform.os}/{self.platform.arch}/kubectl{suffix}"

    def add_release(self, tag: str, content: bytes, checksum: str | None = None) -> None:
        """Publish a binary and its .sha256 (correct unless given)."""
        url = self.artifact_url(tag)
        digest = checksum if checksum is not None else hashlib.sha256(content).hexdigest()
        self.add(url, content)
        self.add(f"{url}.sha256", f"{digest}  kubectl\n")

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        entry = self.responses.get(url)
        if entry is None:
            return httpx.Response(404, content=b"not found")
        if isinstance(entry, Exception):
            raise entry
        status, content = entry
        return httpx.Response(status, content=content)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def linux_amd64() -> Platform:
    return Platform(os="linux", arch="amd64")


@pytest.fixture
def fake_mirror(linux_amd64: Platform) -> FakeMirror:
    """Provide an empty FakeMirror for linux/amd64."""
    return FakeMirror(linux_amd64)
