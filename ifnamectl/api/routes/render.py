from fastapi import APIRouter

from ifnamectl.modules.machineconfig import marshal_machine_config
from ifnamectl.modules.models import NodeRole
from ifnamectl.modules.selection import build_machine_config, resolve_request
from .models import RenameRequestBody

router = APIRouter()


class RenderRequest(RenameRequestBody):
    role: NodeRole = NodeRole.WORKER


@router.post("/render")
def render_machine_config(req: RenderRequest):
    mc = build_machine_config(resolve_request(req.to_options()), req.role)
    return {"name": mc.name, "role": mc.role.value, "document": marshal_machine_config(mc)}
