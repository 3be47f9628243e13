"""Data models for interface-rename MachineConfigs."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

API_VERSION = "machineconfiguration.openshift.io/v1"
KIND = "MachineConfig"
ROLE_LABEL_KEY = "machineconfiguration.openshift.io/role"
IGNITION_VERSION = "3.2.0"

LINK_FILE_DIR = "/etc/systemd/network/"
# 0644 for the systemd .link files, 0600 for documents written locally
DEFAULT_FILE_MODE = 0o644
DEFAULT_CONFIG_FILE_MODE = 0o600

DEFAULT_MC_NAME = "50-interface-rename"


class NodeRole(str, Enum):
    """Role label values a MachineConfig can target."""
    MASTER = 'master'
    WORKER = 'worker'


@dataclass(frozen=True)
class ByMAC:
    """Match a single interface by its MAC address."""
    address: str


@dataclass(frozen=True)
class ByHardwareID:
    """Match every interface with the given PCI/USB vendor and model IDs."""
    vendor_id: str
    model_id: str


@dataclass(frozen=True)
class ExplicitName:
    """Give the matched interface a fixed name."""
    name: str


@dataclass(frozen=True)
class Policy:
    """Let systemd derive the name from one or more naming schemes."""
    scheme: str


@dataclass(frozen=True)
class NamePrefix:
    """Name MAC-matched interfaces <prefix>0, <prefix>1, ... in order."""
    prefix: str


MatchCriterion = Union[ByMAC, ByHardwareID]
NamingStrategy = Union[ExplicitName, Policy]


@dataclass(frozen=True)
class RenderedFile:
    """One storage.files entry of a MachineConfig."""
    path: str
    source: str
    mode: int = DEFAULT_FILE_MODE
    overwrite: bool = True
    # plain link file text, only used to annotate the rendered YAML
    decoded: str = ""


@dataclass(frozen=True)
class MachineConfig:
    """An OpenShift MachineConfig installing systemd .link files."""
    name: str
    role: NodeRole
    files: Tuple[RenderedFile, ...] = ()
    api_version: str = API_VERSION
    kind: str = KIND
    ignition_version: str = IGNITION_VERSION

    @property
    def labels(self) -> Dict[str, str]:
        return {ROLE_LABEL_KEY: NodeRole(self.role).value}


@dataclass(frozen=True)
class NodeRoleCounts:
    """Node counts per role bucket."""
    control_plane: int = 0
    worker_only: int = 0
    schedulable_masters: int = 0

    @property
    def total_workers(self) -> int:
        return self.worker_only + self.schedulable_masters


@dataclass(frozen=True)
class TopologyResult:
    """Outcome of classifying the cluster nodes."""
    total_nodes: int
    counts: NodeRoleCounts
    use_master_role: bool
    info: str = ""

    @property
    def role(self) -> NodeRole:
        return NodeRole.MASTER if self.use_master_role else NodeRole.WORKER


@dataclass(frozen=True)
class ApplyResult:
    """Outcome of reconciling a MachineConfig against the cluster."""
    name: str
    action: str  # 'created' or 'updated'
    resource_version: Optional[str] = None
    previous_version: Optional[str] = None
