from fastapi import APIRouter

from ifnamectl.modules.topology import detect_topology
from ifnamectl.utils.kube import get_core_api

router = APIRouter()


@router.get("/topology")
def get_topology():
    topology = detect_topology(get_core_api())
    counts = topology.counts
    return {
        "nodes": topology.total_nodes,
        "control_plane": counts.control_plane,
        "workers_total": counts.total_workers,
        "schedulable_masters": counts.schedulable_masters,
        "dedicated_workers": counts.worker_only,
        "role": topology.role.value,
        "summary": topology.info,
    }
