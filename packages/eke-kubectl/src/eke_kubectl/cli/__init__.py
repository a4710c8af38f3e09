"""Command line interface for eke kubectl."""

from eke_kubectl.cli.main import cli

__all__ = ["cli"]
