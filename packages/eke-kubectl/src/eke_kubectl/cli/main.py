"""eke CLI entrypoint."""

from __future__ import annotations

import click

from eke_kubectl import __version__
from eke_kubectl.cli.kubectl import kubectl
from eke_kubectl.cli.logs import setup_logging
from eke_kubectl.cli.utils import CliContext

CLICK_CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"], max_content_width=999)


@click.group(context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(__version__, message="%(version)s")
@click.option(
    "--debug", is_flag=True, envvar="EKE_DEBUG", help="Show debug logs on stderr."
)
@click.option(
    "--verbose", is_flag=True, envvar="EKE_VERBOSE", help="Show progress logs on stderr."
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, verbose: bool) -> None:
    """eke command line tools."""
    setup_logging(debug=debug, verbose=verbose)
    obj = ctx.ensure_object(CliContext)
    obj.debug = debug
    obj.verbose = verbose


cli.add_command(kubectl)
