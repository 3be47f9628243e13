"""Cluster topology detection: decide whether MachineConfigs target masters or workers."""
import logging
from typing import Iterable, Mapping

from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from ifnamectl.errors import ClusterAccessError, NoMembersFound
from .models import NodeRoleCounts, TopologyResult

logger = logging.getLogger("ifnamectl.topology")

MASTER_LABELS = ("node-role.kubernetes.io/master", "node-role.kubernetes.io/control-plane")
WORKER_LABEL = "node-role.kubernetes.io/worker"


def node_roles(labels: Iterable[str]):
    """Return (is_master, is_worker) for a node's label keys."""
    keys = set(labels or ())
    is_master = any(label in keys for label in MASTER_LABELS)
    is_worker = WORKER_LABEL in keys
    return is_master, is_worker


def count_node_roles(label_sets: Iterable[Iterable[str]]) -> NodeRoleCounts:
    control_plane = worker_only = schedulable_masters = 0

    for labels in label_sets:
        is_master, is_worker = node_roles(labels)
        if is_master:
            control_plane += 1
        if is_master and is_worker:
            schedulable_masters += 1
        elif is_worker:
            worker_only += 1

    return NodeRoleCounts(
        control_plane=control_plane,
        worker_only=worker_only,
        schedulable_masters=schedulable_masters,
    )


def should_use_master_role(total_nodes: int, counts: NodeRoleCounts) -> bool:
    """Single node, or compact cluster (schedulable masters and no dedicated workers)."""
    return total_nodes == 1 or (counts.schedulable_masters > 0 and counts.worker_only == 0)


def build_cluster_info(total_nodes: int, counts: NodeRoleCounts) -> str:
    lines = [
        f"  Nodes: {total_nodes}",
        f"  Control Plane Nodes: {counts.control_plane}",
        f"  Worker Nodes (total): {counts.total_workers}",
    ]
    if counts.schedulable_masters > 0:
        lines.append(f"  Schedulable Masters (also workers): {counts.schedulable_masters}")
    if counts.worker_only > 0:
        lines.append(f"  Dedicated Workers: {counts.worker_only}")
    return "\n".join(lines) + "\n"


def classify_nodes(label_sets: Iterable[Iterable[str]]) -> TopologyResult:
    """Classify a cluster from the label keys of each of its nodes.

    Args:
        label_sets: one collection of label keys per node

    Returns:
        TopologyResult with the role decision and a summary for operators

    Raises:
        NoMembersFound: if there are no nodes
    """
    label_sets = [list(labels or ()) for labels in label_sets]
    if not label_sets:
        raise NoMembersFound("no nodes found in cluster")

    total = len(label_sets)
    counts = count_node_roles(label_sets)
    result = TopologyResult(
        total_nodes=total,
        counts=counts,
        use_master_role=should_use_master_role(total, counts),
        info=build_cluster_info(total, counts),
    )
    logger.debug(f"Topology: {counts} -> role {result.role.value}")
    return result


def detect_topology(core_api: client.CoreV1Api = None) -> TopologyResult:
    """List the cluster nodes and classify them.

    Raises:
        ClusterAccessError: if the nodes cannot be listed
        NoMembersFound: if the cluster has no nodes
    """
    core_api = core_api or client.CoreV1Api()
    try:
        nodes = core_api.list_node()
    except ApiException as e:
        raise ClusterAccessError(f"failed to list nodes: {e.status} {e.reason}") from e
    except HTTPError as e:
        raise ClusterAccessError(f"failed to reach the cluster API: {e}") from e

    label_sets: list = []
    for node in nodes.items or []:
        labels: Mapping[str, str] = (node.metadata.labels if node.metadata else None) or {}
        label_sets.append(labels.keys())
    return classify_nodes(label_sets)
