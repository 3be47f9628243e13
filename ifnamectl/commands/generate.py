import logging
import os
from typing import Optional

import typer

from ifnamectl.commands import fail
from ifnamectl.commands import options as opts
from ifnamectl.errors import IfnamectlError
from ifnamectl.modules.machineconfig import marshal_machine_config
from ifnamectl.modules.models import DEFAULT_CONFIG_FILE_MODE, NodeRole
from ifnamectl.modules.selection import build_machine_config, resolve_request

logger = logging.getLogger("ifnamectl.commands.generate")


def generate_cmd(
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
    role: NodeRole = typer.Option(NodeRole.WORKER, "--role", "-r", help="Role label for the generated MachineConfig"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file path (prints to stdout if not specified)"),
):
    """Generate a MachineConfig and print it or write it to a file."""
    options = opts.rename_options(macs, names, name_policy, name_prefix, vendor, model,
                                  ref_ifname, node, kubeconfig, mc_name)
    try:
        request = resolve_request(options)
        mc = build_machine_config(request, role)
        document = marshal_machine_config(mc)
    except IfnamectlError as e:
        fail(e)

    if output:
        fd = os.open(output, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, DEFAULT_CONFIG_FILE_MODE)
        with os.fdopen(fd, "w") as f:
            f.write(document)
        # os.open only applies the mode to new files
        os.chmod(output, DEFAULT_CONFIG_FILE_MODE)
        logger.debug(f"Wrote {len(mc.files)} link file(s) for {mc.name} to {output}")
        typer.echo(f"MachineConfig written to: {output}")
    else:
        typer.echo(document)
