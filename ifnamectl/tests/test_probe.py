import subprocess
from unittest.mock import MagicMock, patch

import pytest

from ifnamectl.errors import ProbeError
from ifnamectl.modules.probe import parse_udevadm_output, probe_hardware_id, probe_interface

UDEVADM_OUTPUT = """DEVPATH=/devices/pci0000:00/0000:00:1c.0/0000:03:00.0/net/enp3s0
INTERFACE=enp3s0
ID_VENDOR_ID=0x8086
ID_MODEL_ID=0x153a
ID_NET_NAME_PATH=enp3s0
"""


def completed(stdout="", stderr="", returncode=0):
    return MagicMock(stdout=stdout, stderr=stderr, returncode=returncode)


def test_parse_udevadm_output():
    properties = parse_udevadm_output(UDEVADM_OUTPUT, "enp3s0")
    assert properties["ID_VENDOR_ID"] == "0x8086"
    assert properties["ID_MODEL_ID"] == "0x153a"
    assert properties["INTERFACE"] == "enp3s0"


def test_parse_adds_hex_prefix():
    properties = parse_udevadm_output("  ID_VENDOR_ID=8086\nID_MODEL_ID=153a  \n", "eno1")
    assert properties["ID_VENDOR_ID"] == "0x8086"
    assert properties["ID_MODEL_ID"] == "0x153a"


@pytest.mark.parametrize("output", ["ID_VENDOR_ID=0x8086\n", "ID_MODEL_ID=0x153a\n", "", "INTERFACE=eno1\n"])
def test_parse_missing_ids(output):
    with pytest.raises(ProbeError) as exc:
        parse_udevadm_output(output, "eno1", node="worker-0")
    assert exc.value.interface == "eno1"
    assert exc.value.node == "worker-0"


@patch("ifnamectl.modules.probe.subprocess.run")
def test_local_probe(mock_run):
    mock_run.return_value = completed(stdout=UDEVADM_OUTPUT)

    hw_id = probe_hardware_id("enp3s0", timeout=5)

    mock_run.assert_called_once_with(
        ["udevadm", "info", "-q", "property", "-p", "/sys/class/net/enp3s0"],
        capture_output=True, text=True, timeout=5,
    )
    assert hw_id.vendor_id == "0x8086"
    assert hw_id.model_id == "0x153a"


@patch("ifnamectl.modules.probe.subprocess.run")
def test_remote_probe_uses_oc_debug(mock_run):
    mock_run.return_value = completed(stdout=UDEVADM_OUTPUT, stderr="Starting pod/worker-0-debug ...\n")

    probe_interface("eno1", node="worker-0", kubeconfig="/tmp/kubeconfig", timeout=5)

    cmd = mock_run.call_args.args[0]
    assert cmd[:4] == ["oc", "debug", "node/worker-0", "--kubeconfig=/tmp/kubeconfig"]
    assert cmd[4:7] == ["--", "chroot", "/host"]
    assert cmd[-1] == "/sys/class/net/eno1"


def test_remote_probe_requires_kubeconfig():
    with pytest.raises(ProbeError):
        probe_interface("eno1", node="worker-0")


@patch("ifnamectl.modules.probe.subprocess.run")
def test_probe_nonzero_exit(mock_run):
    mock_run.return_value = completed(stderr="Unknown device", returncode=1)

    with pytest.raises(ProbeError) as exc:
        probe_interface("nope0", timeout=5)

    assert "Unknown device" in str(exc.value)
    assert exc.value.interface == "nope0"


@patch("ifnamectl.modules.probe.subprocess.run")
def test_probe_timeout(mock_run):
    mock_run.side_effect = subprocess.TimeoutExpired(cmd="udevadm", timeout=5)
    with pytest.raises(ProbeError) as exc:
        probe_interface("eno1", timeout=5)
    assert "timed out" in str(exc.value)


@patch("ifnamectl.modules.probe.subprocess.run")
def test_probe_missing_binary(mock_run):
    mock_run.side_effect = FileNotFoundError("udevadm")
    with pytest.raises(ProbeError):
        probe_interface("eno1", timeout=5)
