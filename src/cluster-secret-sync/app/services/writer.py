"""Cluster secret writers.

``create`` returns the name of the created secret or raises
``RecordWriteError``. Writers never update an existing secret.
"""

import base64
import time
from typing import Protocol

from kubernetes import client
from kubernetes.client.rest import ApiException

from shared.models import ClusterSecretRecord
from shared.observability import get_logger, log_external_call_end, log_external_call_start

from .errors import RecordConflictError, RecordWriteError

logger = get_logger(__name__)


class RecordWriter(Protocol):
    """Persists cluster secret records."""

    def create(self, record: ClusterSecretRecord) -> str: ...


class DryRunRecordWriter:
    """Logs the record that would be written and writes nothing."""

    def create(self, record: ClusterSecretRecord) -> str:
        logger.info(
            "Dry run: cluster secret not written",
            name=record.name,
            namespace=record.namespace,
            cluster_name=record.cluster_name,
            server=record.server,
            labels=record.labels,
        )
        return record.name


def to_k8s_secret(record: ClusterSecretRecord) -> client.V1Secret:
    """Build the ``V1Secret`` body for a record."""
    return client.V1Secret(
        api_version="v1",
        kind="Secret",
        metadata=client.V1ObjectMeta(
            name=record.name,
            namespace=record.namespace,
            labels=dict(record.labels),
            annotations=dict(record.annotations),
        ),
        type=record.type,
        data={
            key: base64.b64encode(value).decode()
            for key, value in record.secret_data().items()
        },
    )


class KubernetesRecordWriter:
    """Creates cluster secrets through the Kubernetes API."""

    def __init__(self, core_api: client.CoreV1Api):
        self.core_api = core_api

    def create(self, record: ClusterSecretRecord) -> str:
        """Create the secret in the record's namespace.

        Raises:
            RecordConflictError: A secret with this name already exists.
            RecordWriteError: Any other API failure.
        """
        log_external_call_start(logger, "kubernetes", "create_namespaced_secret")
        start = time.monotonic()

        try:
            created = self.core_api.create_namespaced_secret(
                namespace=record.namespace,
                body=to_k8s_secret(record),
            )
        except ApiException as e:
            log_external_call_end(
                logger,
                "kubernetes",
                "create_namespaced_secret",
                success=False,
                duration_ms=(time.monotonic() - start) * 1000,
                error=str(e.reason),
            )
            if e.status == 409:
                raise RecordConflictError(
                    f"Secret {record.namespace}/{record.name} already exists",
                    status=e.status,
                ) from e
            raise RecordWriteError(
                f"Failed to create secret {record.namespace}/{record.name}: {e.reason}",
                status=e.status,
            ) from e

        log_external_call_end(
            logger,
            "kubernetes",
            "create_namespaced_secret",
            success=True,
            duration_ms=(time.monotonic() - start) * 1000,
        )
        return created.metadata.name
