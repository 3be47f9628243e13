from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ifnamectl.commands import fail
from ifnamectl.commands import options as opts
from ifnamectl.errors import IfnamectlError
from ifnamectl.modules.topology import detect_topology
from ifnamectl.utils.kube import get_core_api

console = Console()


def topology_cmd(kubeconfig: Optional[str] = opts.KUBECONFIG):
    """Show node role counts and the role label MachineConfigs would target."""
    try:
        topology = detect_topology(get_core_api(kubeconfig))
    except IfnamectlError as e:
        fail(e)

    counts = topology.counts
    table = Table(title="Cluster topology")
    table.add_column("Category")
    table.add_column("Nodes", justify="right")
    table.add_row("Total", str(topology.total_nodes))
    table.add_row("Control plane", str(counts.control_plane))
    table.add_row("Workers (total)", str(counts.total_workers))
    table.add_row("Schedulable masters", str(counts.schedulable_masters))
    table.add_row("Dedicated workers", str(counts.worker_only))
    console.print(table)
    console.print(f"Role label: [bold]{topology.role.value}[/bold]")
