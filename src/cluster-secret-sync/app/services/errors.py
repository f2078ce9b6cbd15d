"""Exceptions raised while turning a provisioner secret into a cluster secret.

Every per-event failure derives from ``ClusterSyncError`` so the event
handler can drop the event with a single ``except`` clause.
"""


class ClusterSyncError(Exception):
    """Base class for per-event processing failures."""


class ExtractionError(ClusterSyncError):
    """Connection material could not be read from a secret."""


class KubeconfigDecodeError(ExtractionError):
    """The ``kubeconfig`` entry is not a valid kubeconfig document."""


class MissingKubeconfigError(ExtractionError):
    """The secret has no ``kubeconfig`` entry and the policy requires one."""


class RecordSerializationError(ClusterSyncError):
    """The Argo CD cluster config could not be serialized."""


class RecordWriteError(ClusterSyncError):
    """The cluster secret could not be created."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class RecordConflictError(RecordWriteError):
    """A cluster secret with the same name already exists."""
