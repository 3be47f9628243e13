"""Detect vendor/model IDs of a network interface with udevadm, locally or on a cluster node."""
import logging
import subprocess
from typing import Dict, List

from ifnamectl.config import Config
from ifnamectl.errors import ProbeError
from .linkfile import canonical_hw_id
from .models import ByHardwareID

logger = logging.getLogger("ifnamectl.probe")

VENDOR_KEY = "ID_VENDOR_ID"
MODEL_KEY = "ID_MODEL_ID"


def udevadm_command(ifname: str) -> List[str]:
    return ["udevadm", "info", "-q", "property", "-p", f"/sys/class/net/{ifname}"]


def oc_debug_command(kubeconfig: str, node: str, ifname: str) -> List[str]:
    return [
        "oc", "debug", f"node/{node}", f"--kubeconfig={kubeconfig}",
        "--", "chroot", "/host",
    ] + udevadm_command(ifname)


def parse_udevadm_output(output: str, ifname: str, node: str = None) -> Dict[str, str]:
    """Parse ``udevadm info -q property`` output into a dict.

    ID_VENDOR_ID and ID_MODEL_ID are canonicalized to carry the 0x prefix.

    Raises:
        ProbeError: if either ID is missing
    """
    properties: Dict[str, str] = {}
    for line in output.splitlines():
        line = line.strip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        properties[key] = value

    for key in (VENDOR_KEY, MODEL_KEY):
        if properties.get(key):
            properties[key] = canonical_hw_id(properties[key])

    if not properties.get(VENDOR_KEY) or not properties.get(MODEL_KEY):
        raise ProbeError(
            f"could not find vendor ID and/or model ID for interface {ifname}",
            interface=ifname,
            node=node,
            output=output,
        )
    return properties


def _run(cmd: List[str], ifname: str, node: str = None, timeout: float = None) -> str:
    timeout = timeout or Config.PROBE_TIMEOUT
    where = f"node {node}" if node else "local machine"
    logger.debug(f"Probing {ifname} on {where}: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        raise ProbeError(f"{cmd[0]} not found: {e}", interface=ifname, node=node) from e
    except subprocess.TimeoutExpired as e:
        raise ProbeError(
            f"{cmd[0]} timed out after {timeout}s probing {ifname} on {where}",
            interface=ifname,
            node=node,
        ) from e

    output = (result.stdout or "") + (result.stderr or "")
    if result.returncode != 0:
        raise ProbeError(
            f"failed to execute {cmd[0]} for {ifname} on {where} (exit {result.returncode}): {output.strip()}",
            interface=ifname,
            node=node,
            output=output,
        )
    return result.stdout


def probe_interface(ifname: str, node: str = None, kubeconfig: str = None, timeout: float = None) -> Dict[str, str]:
    """Return the udev properties of ``ifname``, from ``node`` when given.

    Remote probing goes through ``oc debug node/<node>`` and needs a kubeconfig.
    """
    if node:
        if not kubeconfig:
            raise ProbeError("--node requires a kubeconfig", interface=ifname, node=node)
        cmd = oc_debug_command(kubeconfig, node, ifname)
    else:
        cmd = udevadm_command(ifname)
    output = _run(cmd, ifname, node=node, timeout=timeout)
    return parse_udevadm_output(output, ifname, node=node)


def probe_hardware_id(ifname: str, node: str = None, kubeconfig: str = None, timeout: float = None) -> ByHardwareID:
    properties = probe_interface(ifname, node=node, kubeconfig=kubeconfig, timeout=timeout)
    hw_id = ByHardwareID(vendor_id=properties[VENDOR_KEY], model_id=properties[MODEL_KEY])
    logger.info(
        f"Auto-detected from {f'node {node}' if node else 'local'} interface {ifname}: "
        f"Vendor ID={hw_id.vendor_id}, Model ID={hw_id.model_id}"
    )
    return hw_id
