"""CLI commands for workload endpoint names."""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.table import Table

from k8sconv.conversion.constants import DEFAULT_ENDPOINT
from k8sconv.conversion.names import (
    WorkloadEndpointIdentifiers,
    parse_workload_endpoint_name,
    veth_name_for_workload,
)
from k8sconv.errors import MalformedInputError

console = Console()
err_console = Console(stderr=True)


@click.command("endpoint-name")
@click.argument("node")
@click.argument("pod")
@click.option(
    "--endpoint",
    default=DEFAULT_ENDPOINT,
    show_default=True,
    help="Endpoint (interface) name inside the pod.",
)
def endpoint_name(node: str, pod: str, endpoint: str) -> None:
    """Show the workload endpoint and interface names for NODE and POD."""
    try:
        name = WorkloadEndpointIdentifiers(
            node=node, pod=pod, endpoint=endpoint
        ).calculate_name()
    except MalformedInputError as exc:
        err_console.print(f"[red]{exc}[/red]")
        sys.exit(1)

    table = Table(show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Endpoint name", name)
    table.add_row("Interface name", veth_name_for_workload(name))
    console.print(table)


@click.command("parse-name")
@click.argument("name")
def parse_name(name: str) -> None:
    """Split a workload endpoint NAME into its identifiers."""
    try:
        ids = parse_workload_endpoint_name(name)
    except MalformedInputError as exc:
        err_console.print(f"[red]{exc}[/red]")
        sys.exit(1)

    table = Table(show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Node", ids.node)
    table.add_row("Orchestrator", ids.orchestrator)
    table.add_row("Pod", ids.pod)
    table.add_row("Endpoint", ids.endpoint)
    console.print(table)
