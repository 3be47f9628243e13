import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ifnamectl.api.middleware import AuthMiddleware
from ifnamectl.api.routes import apply, render, topology
from ifnamectl.config import Config
from ifnamectl.errors import (
    ClusterAccessError,
    ConflictError,
    IfnamectlError,
    InputContractViolation,
    NoMembersFound,
    ProbeError,
    ReconcileError,
    RemoteLookupError,
    SerializationError,
)

# Most specific first
STATUS_CODES = (
    (InputContractViolation, 422),
    (ProbeError, 502),
    (NoMembersFound, 409),
    (ClusterAccessError, 502),
    (RemoteLookupError, 502),
    (ConflictError, 409),
    (ReconcileError, 502),
    (SerializationError, 500),
)

app = FastAPI(title="ifnamectl")
app.add_middleware(AuthMiddleware)

app.include_router(render.router)
app.include_router(topology.router)
app.include_router(apply.router)


@app.exception_handler(IfnamectlError)
async def ifnamectl_error_handler(request: Request, exc: IfnamectlError):
    status = next((code for error_type, code in STATUS_CODES if isinstance(exc, error_type)), 500)
    return JSONResponse(status_code=status, content={"error": type(exc).__name__, "detail": str(exc)})


def serve():
    uvicorn.run(app, host=Config.API_HOST, port=Config.API_PORT)
