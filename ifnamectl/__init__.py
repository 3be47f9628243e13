"""Generate and apply OpenShift MachineConfigs that rename network interfaces."""

__version__ = "0.1.0"
