"""Build MachineConfig resources carrying systemd .link files and render them as YAML.

Every builder returns a complete, immutable :class:`MachineConfig`; the
whole ``storage.files`` list is produced in one go, so an update always
replaces the managed files of the resource.
"""
import logging
import re
from typing import Any, Dict, List, Sequence, Union

import yaml
from jsonschema import ValidationError, validate

from ifnamectl.errors import CardinalityMismatch, SerializationError
from .linkfile import encode_link_file, render_link_file
from .models import (
    API_VERSION,
    KIND,
    LINK_FILE_DIR,
    ROLE_LABEL_KEY,
    ByHardwareID,
    ByMAC,
    ExplicitName,
    MachineConfig,
    NodeRole,
    Policy,
    RenderedFile,
)

logger = logging.getLogger("ifnamectl.machineconfig")

MACHINECONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "apiVersion": {"const": API_VERSION},
        "kind": {"const": KIND},
        "metadata": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "labels": {
                    "type": "object",
                    "properties": {ROLE_LABEL_KEY: {"enum": [r.value for r in NodeRole]}},
                    "required": [ROLE_LABEL_KEY],
                },
            },
            "required": ["name", "labels"],
        },
        "spec": {
            "type": "object",
            "properties": {
                "config": {
                    "type": "object",
                    "properties": {
                        "ignition": {
                            "type": "object",
                            "properties": {"version": {"type": "string"}},
                            "required": ["version"],
                        },
                        "storage": {
                            "type": "object",
                            "properties": {
                                "files": {
                                    "type": "array",
                                    "items": {
                                        "type": "object",
                                        "properties": {
                                            "path": {"type": "string", "pattern": "^/"},
                                            "mode": {"type": "integer"},
                                            "overwrite": {"type": "boolean"},
                                            "contents": {
                                                "type": "object",
                                                "properties": {"source": {"type": "string"}},
                                                "required": ["source"],
                                            },
                                        },
                                        "required": ["path", "mode", "overwrite", "contents"],
                                    },
                                }
                            },
                            "required": ["files"],
                        },
                    },
                    "required": ["ignition", "storage"],
                }
            },
            "required": ["config"],
        },
    },
    "required": ["apiVersion", "kind", "metadata", "spec"],
}

# Indentation of the decoded-content comments, aligned under "contents:"/"source:"
COMMENT_INDENT = " " * 10
_PATH_LINE = re.compile(r"^\s*- path: ")


def link_file_path(discriminator: str) -> str:
    return f"{LINK_FILE_DIR}10-{discriminator}.link"


def _rendered_file(path: str, link_file: str) -> RenderedFile:
    return RenderedFile(path=path, source=encode_link_file(link_file), decoded=link_file)


def _machine_config(name: str, role: Union[NodeRole, str], files: Sequence[RenderedFile]) -> MachineConfig:
    mc = MachineConfig(name=name, role=NodeRole(role), files=tuple(files))
    logger.debug(f"Built MachineConfig {name} ({mc.role.value}) with {len(mc.files)} file(s)")
    return mc


def machine_config_with_prefix(name: str, role: Union[NodeRole, str], macs: Sequence[str], name_prefix: str) -> MachineConfig:
    """Name the interface with macs[i] ``<name_prefix><i>``."""
    files = []
    for i, mac in enumerate(macs):
        interface_name = f"{name_prefix}{i}"
        link_file = render_link_file(ByMAC(mac), ExplicitName(interface_name))
        files.append(_rendered_file(link_file_path(interface_name), link_file))
    return _machine_config(name, role, files)


def machine_config_with_names(name: str, role: Union[NodeRole, str], macs: Sequence[str], names: Sequence[str]) -> MachineConfig:
    """Name the interface with macs[i] names[i].

    Raises:
        CardinalityMismatch: if the two lists differ in length
    """
    if len(macs) != len(names):
        raise CardinalityMismatch(macs=len(macs), names=len(names))

    files = []
    for mac, interface_name in zip(macs, names):
        link_file = render_link_file(ByMAC(mac), ExplicitName(interface_name))
        files.append(_rendered_file(link_file_path(interface_name), link_file))
    return _machine_config(name, role, files)


def machine_config_with_policy(name: str, role: Union[NodeRole, str], macs: Sequence[str], name_policy: str) -> MachineConfig:
    """Apply the same NamePolicy to every MAC; file names are keyed on the MAC."""
    files = []
    for mac in macs:
        link_file = render_link_file(ByMAC(mac), Policy(name_policy))
        safe_mac = mac.replace(":", "")
        files.append(_rendered_file(link_file_path(f"interface-{safe_mac}"), link_file))
    return _machine_config(name, role, files)


def machine_config_with_hw_id_and_name(name: str, role: Union[NodeRole, str], vendor_id: str, model_id: str, interface_name: str) -> MachineConfig:
    link_file = render_link_file(ByHardwareID(vendor_id, model_id), ExplicitName(interface_name))
    return _machine_config(name, role, [_rendered_file(link_file_path(interface_name), link_file)])


def machine_config_with_hw_id_and_policy(name: str, role: Union[NodeRole, str], vendor_id: str, model_id: str, name_policy: str) -> MachineConfig:
    link_file = render_link_file(ByHardwareID(vendor_id, model_id), Policy(name_policy))
    path = link_file_path(f"interface-{_safe_hw_token(vendor_id)}-{_safe_hw_token(model_id)}")
    return _machine_config(name, role, [_rendered_file(path, link_file)])


def _safe_hw_token(value: str) -> str:
    # only 0x and colons are stripped; anything else is kept as given
    return value.replace("0x", "").replace(":", "")


def to_dict(mc: MachineConfig) -> Dict[str, Any]:
    """Return the resource body as sent to the cluster API."""
    return {
        "apiVersion": mc.api_version,
        "kind": mc.kind,
        "metadata": {
            "name": mc.name,
            "labels": mc.labels,
        },
        "spec": {
            "config": {
                "ignition": {"version": mc.ignition_version},
                "storage": {
                    "files": [
                        {
                            "path": f.path,
                            "mode": f.mode,
                            "overwrite": f.overwrite,
                            "contents": {"source": f.source},
                        }
                        for f in mc.files
                    ]
                },
            }
        },
    }


def marshal_machine_config(mc: MachineConfig) -> str:
    """Serialize a MachineConfig to YAML with the decoded .link contents as comments.

    Raises:
        SerializationError: if the resource does not validate or cannot be dumped
    """
    body = to_dict(mc)
    try:
        validate(instance=body, schema=MACHINECONFIG_SCHEMA)
        data = yaml.safe_dump(body, sort_keys=False, default_flow_style=False)
    except ValidationError as e:
        raise SerializationError(f"MachineConfig {mc.name} is malformed: {e.message}") from e
    except yaml.YAMLError as e:
        raise SerializationError(f"Failed to marshal MachineConfig {mc.name}: {e}") from e
    return add_link_file_comments(data, mc)


def add_link_file_comments(yaml_content: str, mc: MachineConfig) -> str:
    """Insert the decoded content of each .link file beneath its path line.

    Each storage.files item is emitted starting with its ``- path:`` key, so
    path lines pair with ``mc.files`` in order. Blank lines of the decoded
    content are skipped.
    """
    files = iter(mc.files)
    result: List[str] = []

    for line in yaml_content.split("\n"):
        result.append(line)
        if not _PATH_LINE.match(line):
            continue
        entry = next(files, None)
        if entry is None or not entry.path.startswith(LINK_FILE_DIR) or not entry.decoded:
            continue
        for comment_line in entry.decoded.split("\n"):
            if comment_line:
                result.append(f"{COMMENT_INDENT}# {comment_line}")

    return "\n".join(result)
