from typing import Optional

import typer

from ifnamectl.commands import fail
from ifnamectl.commands import options as opts
from ifnamectl.errors import IfnamectlError
from ifnamectl.modules.probe import probe_hardware_id
from ifnamectl.utils.kube import resolve_kubeconfig_path


def probe_cmd(
    ifname: str = typer.Option(..., "--ifname", "-i", help="Interface to inspect"),
    node: Optional[str] = opts.NODE,
    kubeconfig: Optional[str] = opts.KUBECONFIG,
):
    """Print the vendor and model IDs udev reports for an interface."""
    try:
        hw_id = probe_hardware_id(
            ifname,
            node=node,
            kubeconfig=resolve_kubeconfig_path(kubeconfig) if node else None,
        )
    except IfnamectlError as e:
        fail(e)

    typer.echo(f"Vendor ID={hw_id.vendor_id}")
    typer.echo(f"Model ID={hw_id.model_id}")
