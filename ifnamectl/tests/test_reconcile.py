from unittest.mock import MagicMock

import pytest
from kubernetes.client.rest import ApiException
from urllib3.exceptions import MaxRetryError

from ifnamectl.errors import ConflictError, ReconcileError, RemoteLookupError
from ifnamectl.modules.machineconfig import machine_config_with_names, to_dict
from ifnamectl.modules.reconcile import MC_GROUP, MC_PLURAL, MC_VERSION, apply_machine_config


@pytest.fixture
def mc():
    return machine_config_with_names("50-interface-rename", "worker", ["aa:bb:cc:dd:ee:ff"], ["ptp0"])


def test_creates_when_not_found(mc):
    api = MagicMock()
    api.get_cluster_custom_object.side_effect = ApiException(status=404, reason="Not Found")
    api.create_cluster_custom_object.return_value = {"metadata": {"resourceVersion": "7"}}

    result = apply_machine_config(mc, api)

    api.create_cluster_custom_object.assert_called_once_with(
        group=MC_GROUP, version=MC_VERSION, plural=MC_PLURAL, body=to_dict(mc),
    )
    api.replace_cluster_custom_object.assert_not_called()
    assert result.action == "created"
    assert result.resource_version == "7"


def test_updates_with_remote_resource_version(mc):
    api = MagicMock()
    api.get_cluster_custom_object.return_value = {"metadata": {"name": mc.name, "resourceVersion": "42"}}
    api.replace_cluster_custom_object.return_value = {"metadata": {"resourceVersion": "43"}}

    result = apply_machine_config(mc, api)

    api.get_cluster_custom_object.assert_called_once_with(
        group=MC_GROUP, version=MC_VERSION, plural=MC_PLURAL, name=mc.name,
    )
    kwargs = api.replace_cluster_custom_object.call_args.kwargs
    assert kwargs["name"] == mc.name
    assert kwargs["body"]["metadata"]["resourceVersion"] == "42"
    assert kwargs["body"]["spec"] == to_dict(mc)["spec"]
    api.create_cluster_custom_object.assert_not_called()
    assert result.action == "updated"
    assert result.previous_version == "42"
    assert result.resource_version == "43"


@pytest.mark.parametrize("status", [401, 403, 500, 503])
def test_lookup_errors_never_create(mc, status):
    api = MagicMock()
    api.get_cluster_custom_object.side_effect = ApiException(status=status, reason="boom")

    with pytest.raises(RemoteLookupError) as exc:
        apply_machine_config(mc, api)

    assert exc.value.status == status
    assert exc.value.name == mc.name
    api.create_cluster_custom_object.assert_not_called()
    api.replace_cluster_custom_object.assert_not_called()


def test_stale_update_raises_conflict(mc):
    api = MagicMock()
    api.get_cluster_custom_object.return_value = {"metadata": {"resourceVersion": "42"}}
    api.replace_cluster_custom_object.side_effect = ApiException(status=409, reason="Conflict")

    with pytest.raises(ConflictError):
        apply_machine_config(mc, api)

    assert api.replace_cluster_custom_object.call_count == 1


def test_update_failure(mc):
    api = MagicMock()
    api.get_cluster_custom_object.return_value = {"metadata": {"resourceVersion": "42"}}
    api.replace_cluster_custom_object.side_effect = ApiException(status=422, reason="Invalid")

    with pytest.raises(ReconcileError) as exc:
        apply_machine_config(mc, api)

    assert not isinstance(exc.value, ConflictError)
    assert exc.value.status == 422


def test_create_race_is_reported(mc):
    api = MagicMock()
    api.get_cluster_custom_object.side_effect = ApiException(status=404, reason="Not Found")
    api.create_cluster_custom_object.side_effect = ApiException(status=409, reason="AlreadyExists")

    with pytest.raises(ReconcileError) as exc:
        apply_machine_config(mc, api)

    assert exc.value.status == 409


def test_unreachable_api_server_never_creates(mc):
    api = MagicMock()
    api.get_cluster_custom_object.side_effect = MaxRetryError(None, "/apis", "connection refused")

    with pytest.raises(RemoteLookupError) as exc:
        apply_machine_config(mc, api)

    assert exc.value.status is None
    assert exc.value.name == mc.name
    api.create_cluster_custom_object.assert_not_called()
    api.replace_cluster_custom_object.assert_not_called()


def test_connection_lost_during_update(mc):
    api = MagicMock()
    api.get_cluster_custom_object.return_value = {"metadata": {"resourceVersion": "42"}}
    api.replace_cluster_custom_object.side_effect = MaxRetryError(None, "/apis", "read timed out")

    with pytest.raises(ReconcileError) as exc:
        apply_machine_config(mc, api)

    assert not isinstance(exc.value, (ConflictError, RemoteLookupError))
    assert exc.value.status is None


def test_connection_lost_during_create(mc):
    api = MagicMock()
    api.get_cluster_custom_object.side_effect = ApiException(status=404, reason="Not Found")
    api.create_cluster_custom_object.side_effect = MaxRetryError(None, "/apis", "read timed out")

    with pytest.raises(ReconcileError) as exc:
        apply_machine_config(mc, api)

    assert not isinstance(exc.value, RemoteLookupError)
