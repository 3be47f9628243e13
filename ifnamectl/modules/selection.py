"""Turn user options into a validated rename request and build the MachineConfig for it."""
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from ifnamectl.config import Config
from ifnamectl.errors import (
    CardinalityMismatch,
    ConflictingOptions,
    InputContractViolation,
    MissingMatchCriterion,
    MissingNamingStrategy,
)
from ifnamectl.utils import parse_csv
from ifnamectl.utils.kube import resolve_kubeconfig_path
from . import machineconfig
from .models import ByHardwareID, ByMAC, ExplicitName, MachineConfig, NamePrefix, NodeRole, Policy
from .probe import probe_hardware_id

logger = logging.getLogger("ifnamectl.selection")

MacMatch = Tuple[ByMAC, ...]
Match = Union[MacMatch, ByHardwareID]
Naming = Union[Tuple[ExplicitName, ...], Policy, NamePrefix]


@dataclass(frozen=True)
class RenameOptions:
    """Everything the user asked for, as given on the command line or API."""
    macs: Tuple[str, ...] = ()
    names: Tuple[str, ...] = ()
    name_policy: str = ""
    name_prefix: str = ""
    vendor: str = ""
    model: str = ""
    ref_ifname: str = ""
    node: str = ""
    mc_name: str = Config.MC_NAME
    kubeconfig: Optional[str] = None

    @classmethod
    def from_strings(cls, macs: str = None, names: str = None, **kwargs) -> "RenameOptions":
        """Build options from comma-separated ``macs``/``names`` strings."""
        kwargs = {k: (v.strip() if isinstance(v, str) and k != "kubeconfig" else v)
                  for k, v in kwargs.items() if v is not None}
        return cls(macs=tuple(parse_csv(macs)), names=tuple(parse_csv(names)), **kwargs)


@dataclass(frozen=True)
class RenameRequest:
    """A validated (match, naming) pair for one MachineConfig."""
    name: str
    match: Match
    naming: Naming


def validate_options(options: RenameOptions) -> None:
    """Check option combinations without touching the network or local hardware.

    Raises:
        InputContractViolation: one of its subclasses, naming the offending options
    """
    vendor, model, ref = options.vendor, options.model, options.ref_ifname

    if ref and (vendor or model):
        raise ConflictingOptions("--refIfName cannot be used with --vendor or --model")
    if options.node and not ref:
        raise ConflictingOptions("--node requires --refIfName to specify which interface to detect")
    if options.node and not resolve_kubeconfig_path(options.kubeconfig):
        raise InputContractViolation("--node requires --kubeconfig or KUBECONFIG environment variable")
    if bool(vendor) != bool(model):
        raise MissingMatchCriterion("--vendor and --model must be specified together")

    by_hw_id = bool(vendor or ref)
    if options.macs and by_hw_id:
        raise ConflictingOptions("--macs cannot be combined with --vendor/--model or --refIfName")
    if not options.macs and not by_hw_id:
        raise MissingMatchCriterion(
            "at least one matching method must be specified: --macs, --vendor/--model or --refIfName"
        )

    naming_given = [flag for flag, value in (
        ("--names", options.names),
        ("--name-policy", options.name_policy),
        ("--name-prefix", options.name_prefix),
    ) if value]
    if not naming_given:
        raise MissingNamingStrategy("either --name-policy, --names or --name-prefix must be specified")
    if len(naming_given) > 1:
        raise ConflictingOptions(f"{' and '.join(naming_given)} are mutually exclusive")

    if options.names and options.macs and len(options.names) != len(options.macs):
        raise CardinalityMismatch(macs=len(options.macs), names=len(options.names))
    if by_hw_id and len(options.names) > 1:
        raise CardinalityMismatch(
            macs=1,
            names=len(options.names),
            message="when using --vendor/--model matching, only one interface name can be specified",
        )
    if by_hw_id and options.name_prefix:
        raise ConflictingOptions("--name-prefix can only be used with --macs")


def resolve_request(
    options: RenameOptions,
    probe: Callable[..., ByHardwareID] = probe_hardware_id,
) -> RenameRequest:
    """Validate ``options`` and, for --refIfName, detect the vendor/model IDs.

    The probe only runs once every option check has passed.
    """
    validate_options(options)

    match: Match
    if options.ref_ifname:
        kubeconfig = resolve_kubeconfig_path(options.kubeconfig) if options.node else None
        match = probe(options.ref_ifname, node=options.node or None, kubeconfig=kubeconfig)
    elif options.vendor:
        match = ByHardwareID(vendor_id=options.vendor, model_id=options.model)
    else:
        match = tuple(ByMAC(mac) for mac in options.macs)

    naming: Naming
    if options.names:
        naming = tuple(ExplicitName(n) for n in options.names)
    elif options.name_policy:
        naming = Policy(options.name_policy)
    else:
        naming = NamePrefix(options.name_prefix)

    return RenameRequest(name=options.mc_name, match=match, naming=naming)


def build_machine_config(request: RenameRequest, role: Union[NodeRole, str] = NodeRole.WORKER) -> MachineConfig:
    """Dispatch a request to the builder for its (match, naming) combination."""
    match, naming = request.match, request.naming

    if isinstance(match, ByHardwareID):
        if isinstance(naming, Policy):
            return machineconfig.machine_config_with_hw_id_and_policy(
                request.name, role, match.vendor_id, match.model_id, naming.scheme)
        if isinstance(naming, tuple) and len(naming) == 1:
            return machineconfig.machine_config_with_hw_id_and_name(
                request.name, role, match.vendor_id, match.model_id, naming[0].name)
        raise TypeError(f"Unsupported naming for hardware ID match: {naming!r}")

    if isinstance(match, tuple):
        macs = [m.address for m in match]
        if isinstance(naming, tuple):
            return machineconfig.machine_config_with_names(
                request.name, role, macs, [n.name for n in naming])
        if isinstance(naming, Policy):
            return machineconfig.machine_config_with_policy(request.name, role, macs, naming.scheme)
        if isinstance(naming, NamePrefix):
            return machineconfig.machine_config_with_prefix(request.name, role, macs, naming.prefix)
        raise TypeError(f"Unsupported naming for MAC match: {naming!r}")

    raise TypeError(f"Unsupported match: {match!r}")
