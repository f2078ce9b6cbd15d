"""Configuration management module.

This module provides:
- Environment-based configuration with validation
- Service-specific settings classes
- Cached settings access via get_settings()
"""

from .settings import (
    DEFAULT_NAMESPACE,
    SERVICE_ACCOUNT_NAMESPACE_FILE,
    ClusterSyncSettings,
    Environment,
    KubernetesSettings,
    LogFormat,
    LogLevel,
    MissingKubeconfigPolicy,
    Settings,
    get_settings,
    resolve_local_namespace,
)

__all__ = [
    # Main settings
    "Settings",
    "get_settings",
    "resolve_local_namespace",
    # Enums
    "Environment",
    "LogLevel",
    "LogFormat",
    "MissingKubeconfigPolicy",
    # Component settings
    "KubernetesSettings",
    # Service-specific settings
    "ClusterSyncSettings",
    # Constants
    "DEFAULT_NAMESPACE",
    "SERVICE_ACCOUNT_NAMESPACE_FILE",
]
