"""Configuration management for the ifnamectl application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

class Config:
    """Application configuration with sensible defaults."""

    # MachineConfig defaults
    MC_NAME: str = os.getenv("IFNAMECTL_MC_NAME", "50-interface-rename")

    # Cluster access
    KUBECONFIG: str = os.getenv("KUBECONFIG", "")
    KUBECONFIG_CONTENT: str = os.getenv("KUBECONFIG_CONTENT", "")

    # Timeouts (in seconds)
    PROBE_TIMEOUT: float = float(os.getenv("IFNAMECTL_PROBE_TIMEOUT", "30"))

    # HTTP API
    API_KEY: str = os.getenv("IFNAMECTL_API_KEY", "ifnamectl-secret")
    API_HOST: str = os.getenv("IFNAMECTL_API_HOST", "127.0.0.1")
    API_PORT: int = int(os.getenv("IFNAMECTL_API_PORT", "8000"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

# Values are read once at import time; tests and callers override attributes directly
