import logging
from typing import Optional

import typer

from ifnamectl.commands import fail
from ifnamectl.commands import options as opts
from ifnamectl.errors import IfnamectlError
from ifnamectl.modules.machineconfig import marshal_machine_config
from ifnamectl.modules.reconcile import apply_machine_config
from ifnamectl.modules.selection import build_machine_config, resolve_request
from ifnamectl.modules.topology import detect_topology
from ifnamectl.utils.kube import get_core_api, get_custom_objects_api, resolve_kubeconfig_path

logger = logging.getLogger("ifnamectl.commands.apply")

SEPARATOR = "=" * 80


def apply_cmd(
    macs: Optional[str] = opts.MACS,
    names: Optional[str] = opts.NAMES,
    name_policy: Optional[str] = opts.NAME_POLICY,
    name_prefix: Optional[str] = opts.NAME_PREFIX,
    vendor: Optional[str] = opts.VENDOR,
    model: Optional[str] = opts.MODEL,
    ref_ifname: Optional[str] = opts.REF_IFNAME,
    node: Optional[str] = opts.NODE,
    kubeconfig: Optional[str] = opts.KUBECONFIG,
    mc_name: str = opts.MC_NAME,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Generate a MachineConfig for the cluster's topology and create or update it."""
    options = opts.rename_options(macs, names, name_policy, name_prefix, vendor, model,
                                  ref_ifname, node, kubeconfig, mc_name)
    try:
        request = resolve_request(options)

        typer.echo(f"Using kubeconfig: {resolve_kubeconfig_path(kubeconfig)}")
        typer.echo("\nCluster information:")
        topology = detect_topology(get_core_api(kubeconfig))
        typer.echo(topology.info)
        if topology.use_master_role:
            typer.echo("⚠️  Single-node or master schedulable cluster detected - will use 'master' role label")
        else:
            typer.echo("✓ Multi-node cluster detected - will use 'worker' role label")

        mc = build_machine_config(request, topology.role)
        document = marshal_machine_config(mc)

        typer.echo("\n" + SEPARATOR)
        typer.echo("MachineConfig to be applied:")
        typer.echo(SEPARATOR)
        typer.echo(document)
        typer.echo(SEPARATOR)

        if not yes and not typer.confirm("\nDo you want to apply this MachineConfig to the cluster?", default=False):
            typer.echo("Aborted.")
            raise typer.Exit()

        result = apply_machine_config(mc, get_custom_objects_api(kubeconfig))
    except IfnamectlError as e:
        fail(e)

    logger.debug(f"{result.name} {result.action}, resourceVersion {result.resource_version}")
    typer.echo(f"\n✓ MachineConfig '{result.name}' {result.action} successfully!")
    typer.echo("\nNote: The Machine Config Operator will roll out this change to the nodes.")
    typer.echo("This may take several minutes and will cause node reboots.")
