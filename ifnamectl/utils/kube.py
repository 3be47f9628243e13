import os
from pathlib import Path

import yaml
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from ifnamectl.config import Config
from ifnamectl.errors import ClusterAccessError


def resolve_kubeconfig_path(path: str = None) -> str:
    """
    Pick the kubeconfig to use: explicit path, then $KUBECONFIG, then ~/.kube/config.
    Returns an empty string if no home directory can be determined.
    """
    if path:
        return os.path.expanduser(path)
    if Config.KUBECONFIG:
        return Config.KUBECONFIG
    home = os.path.expanduser("~")
    if home == "~":
        return ""
    return os.path.join(home, ".kube", "config")


def load_kubeconfig(path: str = None) -> str:
    """
    Load the kubeconfig from a given path or from the KUBECONFIG_CONTENT env var.
    Returns the path used, or "KUBECONFIG_CONTENT" when loaded from the env var.
    """
    # CI/CD secret-based loading, kept in memory
    if Config.KUBECONFIG_CONTENT:
        content = yaml.safe_load(Config.KUBECONFIG_CONTENT)
        if not isinstance(content, dict):
            raise ValueError("KUBECONFIG_CONTENT is not a kubeconfig mapping.")
        config.load_kube_config_from_dict(content)
        return "KUBECONFIG_CONTENT"

    resolved_path = resolve_kubeconfig_path(path)
    if not resolved_path:
        raise ValueError("No kubeconfig path provided and KUBECONFIG_CONTENT is not set.")

    resolved = Path(resolved_path).resolve()
    if not resolved.exists():
        raise FileNotFoundError(f"❌ Kubeconfig not found: {resolved}")
    config.load_kube_config(config_file=str(resolved))
    return str(resolved)


def _load_or_fail(path: str = None) -> str:
    try:
        return load_kubeconfig(path)
    except (FileNotFoundError, ValueError, ConfigException, yaml.YAMLError) as e:
        raise ClusterAccessError(f"failed to load kubeconfig: {e}") from e


def get_core_api(path: str = None) -> client.CoreV1Api:
    _load_or_fail(path)
    return client.CoreV1Api()


def get_custom_objects_api(path: str = None) -> client.CustomObjectsApi:
    _load_or_fail(path)
    return client.CustomObjectsApi()
