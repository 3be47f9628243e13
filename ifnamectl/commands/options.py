"""Options shared by the generate and apply commands."""
from typing import Optional

import typer

from ifnamectl.config import Config
from ifnamectl.modules.selection import RenameOptions

MACS = typer.Option(None, "--macs", "-m", help="Comma-separated list of MAC addresses (e.g., aa:bb:cc:dd:ee:ff,11:22:33:44:55:66)")
NAMES = typer.Option(None, "--names", "-n", help="Comma-separated list of interface names (e.g., ptp0,ptp1). Must match number of MACs.")
NAME_POLICY = typer.Option(None, "--name-policy", "-p", help="NamePolicy scheme(s) (e.g., slot, path, onboard, mac, keep)")
NAME_PREFIX = typer.Option(None, "--name-prefix", help="Name MAC-matched interfaces <prefix>0, <prefix>1, ... in order")
VENDOR = typer.Option(None, "--vendor", help="Vendor ID in hex format (e.g., 0x8086). Use with --model for property-based matching.")
MODEL = typer.Option(None, "--model", help="Model ID in hex format (e.g., 0x153a). Use with --vendor for property-based matching.")
REF_IFNAME = typer.Option(None, "--refIfName", "--ref-ifname", help="Reference interface name to auto-detect vendor and model IDs using udevadm")
NODE = typer.Option(None, "--node", help="Node name for remote vendor/model detection via 'oc debug node'. Use with --refIfName.")
KUBECONFIG = typer.Option(None, "--kubeconfig", "-k", help="Path to kubeconfig file (uses KUBECONFIG env or ~/.kube/config if not specified)")
MC_NAME = typer.Option(Config.MC_NAME, "--mc-name", help="Name of the MachineConfig resource")


def rename_options(
    macs: Optional[str],
    names: Optional[str],
    name_policy: Optional[str],
    name_prefix: Optional[str],
    vendor: Optional[str],
    model: Optional[str],
    ref_ifname: Optional[str],
    node: Optional[str],
    kubeconfig: Optional[str],
    mc_name: str,
) -> RenameOptions:
    return RenameOptions.from_strings(
        macs=macs,
        names=names,
        name_policy=name_policy,
        name_prefix=name_prefix,
        vendor=vendor,
        model=model,
        ref_ifname=ref_ifname,
        node=node,
        kubeconfig=kubeconfig,
        mc_name=mc_name,
    )
