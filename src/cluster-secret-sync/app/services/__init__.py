"""Secret processing services."""

from .builder import (
    CredentialRecordBuilder,
    cluster_secret_name,
    external_cluster_name,
)
from .errors import (
    ClusterSyncError,
    ExtractionError,
    KubeconfigDecodeError,
    MissingKubeconfigError,
    RecordConflictError,
    RecordSerializationError,
    RecordWriteError,
)
from .extractor import KEY_HANDLERS, CredentialExtractor, ExtractedCredentials
from .handler import SecretEventHandler
from .kube import create_core_api
from .watcher import SecretWatcher
from .writer import (
    DryRunRecordWriter,
    KubernetesRecordWriter,
    RecordWriter,
    to_k8s_secret,
)

__all__ = [
    "ClusterSyncError",
    "CredentialExtractor",
    "CredentialRecordBuilder",
    "DryRunRecordWriter",
    "ExtractedCredentials",
    "ExtractionError",
    "KEY_HANDLERS",
    "KubeconfigDecodeError",
    "KubernetesRecordWriter",
    "MissingKubeconfigError",
    "RecordConflictError",
    "RecordSerializationError",
    "RecordWriteError",
    "RecordWriter",
    "SecretEventHandler",
    "SecretWatcher",
    "cluster_secret_name",
    "create_core_api",
    "external_cluster_name",
    "to_k8s_secret",
]
