"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .transport import TransportPort, CredentialProviderPort
from .outline_store import OutlineNodePort
from .config_provider import (
    ConfigProviderPort,
    AppConfig,
    TrackerConfig,
    FieldConfig,
)

__all__ = [
    "TransportPort",
    "CredentialProviderPort",
    "OutlineNodePort",
    "ConfigProviderPort",
    "AppConfig",
    "TrackerConfig",
    "FieldConfig",
]
