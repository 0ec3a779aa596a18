"""CLI command: k8sconv convert <file> — convert Kubernetes manifests."""

from __future__ import annotations

import sys

import click
from rich.console import Console

from k8sconv.calico.export import dump
from k8sconv.config import OUTPUT_FORMATS, ConverterConfig
from k8sconv.conversion.converter import Converter
from k8sconv.errors import ConversionError
from k8sconv.k8s import models as k8s
from k8sconv.k8s.loader import load_manifests

console = Console(stderr=True)


@click.command()
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format (default: yaml, or $K8SCONV_OUTPUT_FORMAT).",
)
@click.option(
    "--tolerate-malformed-peers",
    is_flag=True,
    help="Treat peers with unparseable CIDRs as unrestricted instead of failing.",
)
def convert(
    manifest: str,
    output: str | None,
    tolerate_malformed_peers: bool,
) -> None:
    """Convert the Kubernetes resources in MANIFEST to Calico resources."""
    try:
        config = ConverterConfig.load()
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)
    if output is not None:
        config.output_format = output
    if tolerate_malformed_peers:
        config.tolerate_malformed_peers = True

    converter = Converter(config)
    converted: list[object] = []
    try:
        for obj in load_manifests(manifest):
            result = converter.convert(obj)
            if result is None:
                name = obj.metadata.name if isinstance(obj, k8s.Pod) else "?"
                console.print(f"[dim]Skipping pod {name}: not a workload endpoint[/dim]")
                continue
            converted.append(result)
    except ConversionError as exc:
        console.print(f"[red]Conversion failed:[/red] {exc}")
        sys.exit(1)

    click.echo(dump(converted, config.output_format), nl=False)
