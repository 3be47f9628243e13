from unittest.mock import MagicMock

import pytest

from ifnamectl.errors import (
    CardinalityMismatch,
    ConflictingOptions,
    InputContractViolation,
    MissingMatchCriterion,
    MissingNamingStrategy,
)
from ifnamectl.modules.linkfile import decode_link_file
from ifnamectl.modules.models import ByHardwareID, ByMAC, ExplicitName, NamePrefix, NodeRole, Policy
from ifnamectl.modules.selection import RenameOptions, RenameRequest, build_machine_config, resolve_request


def no_probe(*args, **kwargs):
    raise AssertionError("probe must not run")


def test_from_strings_splits_and_trims():
    options = RenameOptions.from_strings(macs=" aa:bb:cc:dd:ee:ff, ,11:22:33:44:55:66 ", names="ptp0,ptp1,", name_policy=None)
    assert options.macs == ("aa:bb:cc:dd:ee:ff", "11:22:33:44:55:66")
    assert options.names == ("ptp0", "ptp1")
    assert options.name_policy == ""
    assert options.mc_name == "50-interface-rename"


@pytest.mark.parametrize("options,error", [
    (RenameOptions(ref_ifname="eno1", vendor="8086", model="153a", names=("ptp0",)), ConflictingOptions),
    (RenameOptions(node="worker-0", vendor="8086", model="153a", names=("ptp0",)), ConflictingOptions),
    (RenameOptions(vendor="8086", names=("ptp0",)), MissingMatchCriterion),
    (RenameOptions(model="153a", names=("ptp0",)), MissingMatchCriterion),
    (RenameOptions(names=("ptp0",)), MissingMatchCriterion),
    (RenameOptions(macs=("aa:bb:cc:dd:ee:ff",), vendor="8086", model="153a", names=("ptp0",)), ConflictingOptions),
    (RenameOptions(macs=("aa:bb:cc:dd:ee:ff",)), MissingNamingStrategy),
    (RenameOptions(macs=("aa:bb:cc:dd:ee:ff",), names=("ptp0",), name_policy="slot"), ConflictingOptions),
    (RenameOptions(macs=("aa:bb:cc:dd:ee:ff",), name_prefix="ptp", name_policy="slot"), ConflictingOptions),
    (RenameOptions(macs=("aa:bb:cc:dd:ee:ff", "11:22:33:44:55:66"), names=("ptp0",)), CardinalityMismatch),
    (RenameOptions(vendor="8086", model="153a", names=("ptp0", "ptp1")), CardinalityMismatch),
    (RenameOptions(vendor="8086", model="153a", name_prefix="ptp"), ConflictingOptions),
    (RenameOptions(ref_ifname="eno1", names=("ptp0", "ptp1")), CardinalityMismatch),
])
def test_invalid_combinations_fail_before_probing(options, error):
    with pytest.raises(error):
        resolve_request(options, probe=no_probe)


def test_node_requires_kubeconfig(monkeypatch):
    monkeypatch.setattr("ifnamectl.modules.selection.resolve_kubeconfig_path", lambda path=None: "")
    with pytest.raises(InputContractViolation):
        resolve_request(RenameOptions(ref_ifname="eno1", node="worker-0", names=("ptp0",)), probe=no_probe)


def test_cardinality_error_reports_counts():
    with pytest.raises(CardinalityMismatch) as exc:
        resolve_request(RenameOptions(macs=("a", "b", "c"), names=("x",)), probe=no_probe)
    assert (exc.value.macs, exc.value.names) == (3, 1)


def test_resolve_macs_with_names():
    request = resolve_request(RenameOptions(macs=("aa:bb:cc:dd:ee:ff",), names=("ptp0",), mc_name="mc"))
    assert request == RenameRequest(name="mc", match=(ByMAC("aa:bb:cc:dd:ee:ff"),), naming=(ExplicitName("ptp0"),))


def test_resolve_vendor_model_with_policy():
    request = resolve_request(RenameOptions(vendor="8086", model="153a", name_policy="slot"), probe=no_probe)
    assert request.match == ByHardwareID("8086", "153a")
    assert request.naming == Policy("slot")


def test_resolve_ref_ifname_probes_locally():
    probe = MagicMock(return_value=ByHardwareID("0x8086", "0x153a"))

    request = resolve_request(RenameOptions(ref_ifname="enp3s0", names=("ptp0",)), probe=probe)

    probe.assert_called_once_with("enp3s0", node=None, kubeconfig=None)
    assert request.match == ByHardwareID("0x8086", "0x153a")


def test_resolve_ref_ifname_on_node():
    probe = MagicMock(return_value=ByHardwareID("0x8086", "0x153a"))

    resolve_request(
        RenameOptions(ref_ifname="eno1", node="worker-0", kubeconfig="/tmp/kc", name_policy="path"),
        probe=probe,
    )

    probe.assert_called_once_with("eno1", node="worker-0", kubeconfig="/tmp/kc")


@pytest.mark.parametrize("request_,paths", [
    (RenameRequest("mc", (ByMAC("aa:bb:cc:dd:ee:ff"), ByMAC("11:22:33:44:55:66")), (ExplicitName("a"), ExplicitName("b"))),
     ["/etc/systemd/network/10-a.link", "/etc/systemd/network/10-b.link"]),
    (RenameRequest("mc", (ByMAC("aa:bb:cc:dd:ee:ff"),), Policy("slot")),
     ["/etc/systemd/network/10-interface-aabbccddeeff.link"]),
    (RenameRequest("mc", (ByMAC("aa:bb:cc:dd:ee:ff"), ByMAC("11:22:33:44:55:66")), NamePrefix("ptp")),
     ["/etc/systemd/network/10-ptp0.link", "/etc/systemd/network/10-ptp1.link"]),
    (RenameRequest("mc", ByHardwareID("0x8086", "0x153a"), (ExplicitName("ptp0"),)),
     ["/etc/systemd/network/10-ptp0.link"]),
    (RenameRequest("mc", ByHardwareID("0x8086", "0x153a"), Policy("slot")),
     ["/etc/systemd/network/10-interface-8086-153a.link"]),
])
def test_build_dispatch(request_, paths):
    mc = build_machine_config(request_, NodeRole.MASTER)
    assert [f.path for f in mc.files] == paths
    assert mc.role == NodeRole.MASTER


def test_build_defaults_to_worker():
    mc = build_machine_config(RenameRequest("mc", ByHardwareID("8086", "153a"), (ExplicitName("ptp0"),)))
    assert mc.role == NodeRole.WORKER
    assert "Property=ID_VENDOR_ID=0x8086" in decode_link_file(mc.files[0].source)


def test_build_rejects_unknown_variants():
    with pytest.raises(TypeError):
        build_machine_config(RenameRequest("mc", ByHardwareID("8086", "153a"), NamePrefix("ptp")))
    with pytest.raises(TypeError):
        build_machine_config(RenameRequest("mc", "aa:bb:cc:dd:ee:ff", Policy("slot")))
