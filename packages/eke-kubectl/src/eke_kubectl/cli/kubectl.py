"""eke kubectl: run the kubectl matching the current cluster.

Everything after ``kubectl`` is handed to the resolved binary untouched,
``--help`` included. Two first arguments are reserved:

- ``bins`` lists the kubectl binaries found on this host.
- ``get-bin <version>`` downloads a kubectl release into the local cache.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

import click
from rich.console import Console
from rich.table import Table

from eke_kubectl.cli.utils import CliContext
from eke_kubectl.domain.binary import BinaryCollection
from eke_kubectl.domain.exceptions import EkeKubectlError, VersionParseError
from eke_kubectl.domain.version import SemanticVersion
from eke_kubectl.factories import create_kubectl_wrapper
from eke_kubectl.usecases.version_resolver import VersionResolver

LOGGER = logging.getLogger(__name__)

LIST_BINS_CMD = "bins"
GET_BIN_CMD = "get-bin"


class PassthroughCommand(click.Command):
    """Command whose arguments reach the callback exactly as typed.

    click drops a leading ``--`` and would otherwise try to parse options;
    kubectl must see both.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        ctx.params["args"] = tuple(args)
        return []


@click.command(
    "kubectl",
    cls=PassthroughCommand,
    short_help="run kubectl matching the current cluster",
    context_settings={"help_option_names": []},
)
@click.argument("args", metavar="<args>", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def kubectl(ctx: click.Context, args: Tuple[str, ...]) -> None:
    """Run kubectl in the version the current cluster needs.

    \b
    eke kubectl bins               list kubectl binaries found on this host
    eke kubectl get-bin <version>  download a kubectl release (1.20 or v1.20.1)
    eke kubectl <kubectl args>     anything else is passed to kubectl
    """
    if not args:
        click.echo(ctx.get_help())
        return

    obj = ctx.ensure_object(CliContext)
    try:
        settings = obj.load_settings()
        resolver = obj.resolver_factory(settings)

        if args[0] == LIST_BINS_CMD:
            list_bins(resolver)
        elif args[0] == GET_BIN_CMD:
            get_bin(resolver, args[1:])
        else:
            create_kubectl_wrapper(settings, resolver=resolver, replacer=obj.replacer)(args)
    except EkeKubectlError as e:
        LOGGER.debug("eke kubectl failed", exc_info=True)
        raise click.ClickException(str(e)) from e


def list_bins(resolver: VersionResolver) -> None:
    """Print system-wide then local kubectl binaries as tables."""
    console = Console()
    locator = resolver.locator

    console.print("[green]system-wide kubectl binaries[/green]")
    try:
        _print_bin_table(console, locator.system_binaries())
    except OSError as e:
        console.print(f"Error retrieving binaries: {e}", markup=False)

    console.print()
    console.print("[green]local kubectl binaries[/green]")
    try:
        _print_bin_table(console, locator.local_binaries())
    except OSError as e:
        console.print(f"Error retrieving binaries: {e}", markup=False)


def get_bin(resolver: VersionResolver, args: Tuple[str, ...]) -> None:
    """Download the kubectl release named by the single argument."""
    if len(args) != 1:
        raise click.UsageError(f"{GET_BIN_CMD} takes exactly one version, e.g. 1.20 or v1.19.1")

    try:
        version = SemanticVersion.parse_tolerant(args[0])
    except VersionParseError as e:
        raise click.ClickException(f"invalid version: {e}") from e

    path = resolver.download(version)
    click.echo(str(path))


def _print_bin_table(console: Console, binaries: BinaryCollection) -> None:
    if not binaries:
        console.print("No binaries found.")
        return

    table = Table("#", "Version", "Binary")
    for index, binary in enumerate(binaries, start=1):
        table.add_row(str(index), str(binary.version), str(binary.path))
    console.print(table)
