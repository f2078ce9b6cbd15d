"""Shared data models.

All models follow these conventions:
- Field names: lowercase snake_case, wire names as aliases
- Enums: uppercase SNAKE_CASE
"""

# Base
from .base import SyncBaseModel

# Argo CD cluster registration
from .argocd import (
    MANAGED_BY_ANNOTATION,
    MANAGED_BY_ARGOCD,
    SECRET_TYPE_CLUSTER,
    SECRET_TYPE_LABEL,
    ArgoClusterConfig,
    AuthConfig,
    ClusterSecretRecord,
    TLSClientConfig,
)

# Watch events
from .events import WatchEvent, WatchEventType

# Kubeconfig documents
from .kubeconfig import (
    ClusterInfo,
    ContextInfo,
    KubeConfig,
    NamedCluster,
    NamedContext,
    NamedUser,
    UserInfo,
)

# Source secrets
from .secret import (
    CLUSTER_CA_KEY,
    ENDPOINT_KEY,
    KUBECONFIG_KEY,
    OwnerReference,
    SourceSecret,
)

__all__ = [
    # Base
    "SyncBaseModel",
    # Argo CD
    "ArgoClusterConfig",
    "AuthConfig",
    "ClusterSecretRecord",
    "TLSClientConfig",
    "SECRET_TYPE_LABEL",
    "SECRET_TYPE_CLUSTER",
    "MANAGED_BY_ANNOTATION",
    "MANAGED_BY_ARGOCD",
    # Events
    "WatchEvent",
    "WatchEventType",
    # Kubeconfig
    "ClusterInfo",
    "ContextInfo",
    "KubeConfig",
    "NamedCluster",
    "NamedContext",
    "NamedUser",
    "UserInfo",
    # Source secrets
    "OwnerReference",
    "SourceSecret",
    "KUBECONFIG_KEY",
    "CLUSTER_CA_KEY",
    "ENDPOINT_KEY",
]
