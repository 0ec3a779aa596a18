"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from k8sconv import __version__


@click.group()
@click.version_option(version=__version__, prog_name="k8sconv")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """k8sconv — convert Kubernetes resources into Calico resources."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from k8sconv.cli.convert import convert  # noqa: F811
    from k8sconv.cli.names import endpoint_name, parse_name  # noqa: F811

    main.add_command(convert)
    main.add_command(endpoint_name)
    main.add_command(parse_name)


_register_commands()
