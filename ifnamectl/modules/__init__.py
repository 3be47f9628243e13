"""
Interface rename modules: link file rendering, MachineConfig building,
cluster topology detection and reconciliation.
"""
from .machineconfig import marshal_machine_config, to_dict
from .reconcile import apply_machine_config
from .selection import RenameOptions, build_machine_config, resolve_request
from .topology import classify_nodes, detect_topology

__all__ = [
    'RenameOptions',
    'apply_machine_config',
    'build_machine_config',
    'classify_nodes',
    'detect_topology',
    'marshal_machine_config',
    'resolve_request',
    'to_dict',
]
