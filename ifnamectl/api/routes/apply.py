from fastapi import APIRouter

from ifnamectl.logging import setup_logger
from ifnamectl.modules.reconcile import apply_machine_config
from ifnamectl.modules.selection import build_machine_config, resolve_request
from ifnamectl.modules.topology import detect_topology
from ifnamectl.utils.kube import get_core_api, get_custom_objects_api
from .models import RenameRequestBody

router = APIRouter()
logger = setup_logger("ifnamectl.api")


@router.post("/apply")
def apply(req: RenameRequestBody):
    request = resolve_request(req.to_options())
    topology = detect_topology(get_core_api())
    mc = build_machine_config(request, topology.role)
    logger.info(f"[APPLY] MachineConfig={mc.name}, Role={mc.role.value}, Files={len(mc.files)}")
    result = apply_machine_config(mc, get_custom_objects_api())
    return {
        "name": result.name,
        "action": result.action,
        "role": mc.role.value,
        "resource_version": result.resource_version,
        "previous_version": result.previous_version,
    }
