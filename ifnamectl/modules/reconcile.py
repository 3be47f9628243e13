"""Create-or-update of MachineConfigs against the cluster API."""
import logging

from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from ifnamectl.errors import ConflictError, ReconcileError, RemoteLookupError
from .machineconfig import to_dict
from .models import ApplyResult, MachineConfig

logger = logging.getLogger("ifnamectl.reconcile")

MC_GROUP = "machineconfiguration.openshift.io"
MC_VERSION = "v1"
MC_PLURAL = "machineconfigs"


def apply_machine_config(mc: MachineConfig, api: client.CustomObjectsApi = None) -> ApplyResult:
    """Create ``mc`` or replace the existing MachineConfig of the same name.

    On update the remote resourceVersion is carried over so that the server
    rejects the replace if the object changed in between. Nothing is retried.

    Raises:
        RemoteLookupError: if the lookup fails with anything but 404, or the API server is unreachable
        ConflictError: if the update is rejected with 409
        ReconcileError: if the create or update fails otherwise
    """
    api = api or client.CustomObjectsApi()
    body = to_dict(mc)

    try:
        existing = api.get_cluster_custom_object(
            group=MC_GROUP,
            version=MC_VERSION,
            plural=MC_PLURAL,
            name=mc.name,
        )
    except ApiException as e:
        if e.status != 404:
            raise RemoteLookupError(
                f"failed to look up MachineConfig {mc.name}: {e.status} {e.reason}",
                name=mc.name,
                status=e.status,
            ) from e
        existing = None
    except HTTPError as e:
        raise RemoteLookupError(
            f"failed to look up MachineConfig {mc.name}: {e}",
            name=mc.name,
        ) from e

    if existing is None:
        return _create(api, mc, body)
    return _update(api, mc, body, existing)


def _create(api: client.CustomObjectsApi, mc: MachineConfig, body: dict) -> ApplyResult:
    logger.debug(f"MachineConfig {mc.name} not found, creating it")
    try:
        created = api.create_cluster_custom_object(
            group=MC_GROUP,
            version=MC_VERSION,
            plural=MC_PLURAL,
            body=body,
        )
    except ApiException as e:
        # 409 here means another writer created it after our lookup
        raise ReconcileError(
            f"failed to create MachineConfig {mc.name}: {e.status} {e.reason}",
            name=mc.name,
            status=e.status,
        ) from e
    except HTTPError as e:
        raise ReconcileError(f"failed to create MachineConfig {mc.name}: {e}", name=mc.name) from e

    logger.info(f"Created new MachineConfig: {mc.name}")
    return ApplyResult(
        name=mc.name,
        action="created",
        resource_version=_resource_version(created),
    )


def _update(api: client.CustomObjectsApi, mc: MachineConfig, body: dict, existing: dict) -> ApplyResult:
    previous = _resource_version(existing)
    body["metadata"]["resourceVersion"] = previous

    try:
        updated = api.replace_cluster_custom_object(
            group=MC_GROUP,
            version=MC_VERSION,
            plural=MC_PLURAL,
            name=mc.name,
            body=body,
        )
    except ApiException as e:
        if e.status == 409:
            raise ConflictError(
                f"MachineConfig {mc.name} changed since resourceVersion {previous}; re-run to retry",
                name=mc.name,
                status=e.status,
            ) from e
        raise ReconcileError(
            f"failed to update MachineConfig {mc.name}: {e.status} {e.reason}",
            name=mc.name,
            status=e.status,
        ) from e
    except HTTPError as e:
        raise ReconcileError(f"failed to update MachineConfig {mc.name}: {e}", name=mc.name) from e

    logger.info(f"Updated existing MachineConfig: {mc.name}")
    return ApplyResult(
        name=mc.name,
        action="updated",
        resource_version=_resource_version(updated),
        previous_version=previous,
    )


def _resource_version(obj) -> str:
    if not isinstance(obj, dict):
        return None
    return obj.get("metadata", {}).get("resourceVersion")
