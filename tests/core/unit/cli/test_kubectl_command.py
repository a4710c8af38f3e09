"""Unit tests for the ``eke kubectl`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner

from eke_kubectl.adapters.fakes import (
    FakeBinaryLocator,
    FakeClusterVersionProbe,
    FakeDownloader,
    FakeProcessReplacer,
    ProcessReplaced,
)
from eke_kubectl.adapters.local_cache import LocalCache
from eke_kubectl.cli.main import cli
from eke_kubectl.cli.utils import CliContext
from eke_kubectl.domain.binary import Platform
from eke_kubectl.domain.exceptions import ProbeTimeoutError
from eke_kubectl.domain.settings import KubectlSettings
from eke_kubectl.domain.version import SemanticVersion
from eke_kubectl.usecases.config_loader import ConfigLoader
from eke_kubectl.usecases.version_resolver import VersionResolver


class Harness:
    """Fakes wired into a CliContext."""

    def __init__(self, cache_dir: Path) -> None:
        self.locator = FakeBinaryLocator.with_versions(system=["1.21.0"], local=["1.20.0"])
        self.downloader = FakeDownloader()
        self.probe = FakeClusterVersionProbe.reporting("1.21.3")
        self.replacer = FakeProcessReplacer()
        self.cache = LocalCache(Platform(os="linux", arch="amd64"), cache_dir)
        self.settings: list[KubectlSettings] = []

    def resolver_factory(self) -> Callable[[KubectlSettings], VersionResolver]:
        def factory(settings: KubectlSettings) -> VersionResolver:
            self.settings.append(settings)
            return VersionResolver(
                locator=self.locator,
                downloader=self.downloader,
                probe=self.probe,
                cache=self.cache,
            )

        return factory

    def context(self, config_dir: Path) -> CliContext:
        return CliContext(
            config_loader=ConfigLoader(search_paths=[config_dir], environ={}),
            resolver_factory=self.resolver_factory(),
            replacer=self.replacer,
        )


@pytest.fixture
def harness(tmp_path: Path) -> Harness:
    return Harness(tmp_path / "cache")


@pytest.fixture
def invoke(harness: Harness, tmp_path: Path):
    runner = CliRunner()

    def _invoke(*args: str):
        return runner.invoke(cli, ["kubectl", *args], obj=harness.context(tmp_path / "config"))

    return _invoke


@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.Cli.Kubectl")
class TestKubectlPassthrough:
    """Test arguments reach kubectl untouched."""

    def test_no_arguments_prints_help(self, invoke, harness: Harness) -> None:
        result = invoke()

        assert result.exit_code == 0
        assert "get-bin" in result.output
        assert harness.settings == []

    @pytest.mark.parametrize(
        "args",
        [
            ("get", "pods"),
            ("--help",),
            ("get", "--help"),
            ("--", "get", "pods"),
            ("exec", "-it", "pod", "--", "sh", "-c", "ls"),
        ],
    )
    def test_arguments_forwarded_verbatim(
        self, invoke, harness: Harness, args: tuple[str, ...]
    ) -> None:
        result = invoke(*args)

        assert isinstance(result.exception, ProcessReplaced)
        call = harness.replacer.calls[0]
        assert call.args == args
        assert call.binary_path == Path("/usr/local/bin/kubectl-v1.21.0")

    def test_resolution_failure_exits_non_zero(self, invoke, harness: Harness) -> None:
        harness.probe.set_error(ProbeTimeoutError("cluster unreachable"))
        harness.locator = FakeBinaryLocator()

        result = invoke("get", "pods")

        assert result.exit_code == 1
        assert "Error: cluster unreachable" in result.output
        assert harness.replacer.calls == []

    def test_settings_loaded_from_config_file(
        self, invoke, harness: Harness, tmp_path: Path
    ) -> None:
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "eke.cmd.yaml").write_text("ekeKubectlConfig:\n  timeout: 2\n")

        invoke("version")

        assert harness.settings[0].timeout == 2
        assert harness.probe.timeouts == [2]

    def test_invalid_config_exits_non_zero(self, invoke, tmp_path: Path) -> None:
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "eke.cmd.yaml").write_text("ekeKubectlConfig: [\n")

        result = invoke("version")

        assert result.exit_code == 1
        assert "Invalid YAML" in result.output


@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.Cli.Kubectl")
class TestListBins:
    """Test ``eke kubectl bins``."""

    def test_lists_system_and_local_binaries(self, invoke) -> None:
        result = invoke("bins")

        assert result.exit_code == 0
        assert "system-wide kubectl binaries" in result.output
        assert "local kubectl binaries" in result.output
        assert "1.21.0" in result.output
        assert "1.20.0" in result.output
        assert result.output.index("1.21.0") < result.output.index("local kubectl binaries")

    def test_empty_collections(self, invoke, harness: Harness) -> None:
        harness.locator = FakeBinaryLocator()

        result = invoke("bins")

        assert result.exit_code == 0
        assert result.output.count("No binaries found.") == 2

    def test_listing_error_reported_per_section(self, invoke, harness: Harness) -> None:
        harness.locator.set_exception("system_binaries", OSError("permission denied"))

        result = invoke("bins")

        assert result.exit_code == 0
        assert "Error retrieving binaries: permission denied" in result.output
        assert "1.20.0" in result.output


@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.Cli.Kubectl")
class TestGetBin:
    """Test ``eke kubectl get-bin``."""

    def test_downloads_tolerant_version(self, invoke, harness: Harness) -> None:
        result = invoke("get-bin", "1.20")

        assert result.exit_code == 0
        expected = harness.cache.directory / "kubectl-v1.20.0-linux-amd64"
        assert str(expected) in result.output
        assert harness.downloader.fetch_calls == [(SemanticVersion(1, 20, 0), expected)]

    def test_invalid_version(self, invoke, harness: Harness) -> None:
        result = invoke("get-bin", "latest")

        assert result.exit_code == 1
        assert "invalid version" in result.output
        assert harness.downloader.call_count == 0

    @pytest.mark.parametrize("args", [(), ("1.20", "1.21")])
    def test_requires_exactly_one_version(
        self, invoke, harness: Harness, args: tuple[str, ...]
    ) -> None:
        result = invoke("get-bin", *args)

        assert result.exit_code == 2
        assert harness.downloader.call_count == 0
