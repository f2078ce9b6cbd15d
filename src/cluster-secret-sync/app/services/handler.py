"""Watch event handling.

Runs the extract, build and write steps for one secret creation event.
Failures are logged and the event is dropped; nothing is retried.
"""

from typing import Any

from shared.models import ClusterSecretRecord, SourceSecret
from shared.observability import EventContextManager, get_logger

from .builder import CredentialRecordBuilder
from .errors import ClusterSyncError, RecordWriteError
from .extractor import CredentialExtractor
from .writer import RecordWriter

logger = get_logger(__name__)


class SecretEventHandler:
    """Turns provisioner secrets into Argo CD cluster secrets."""

    def __init__(
        self,
        provisioner_kind: str,
        extractor: CredentialExtractor,
        builder: CredentialRecordBuilder,
        writer: RecordWriter,
    ):
        self.provisioner_kind = provisioner_kind
        self.extractor = extractor
        self.builder = builder
        self.writer = writer

    def on_added(self, secret: Any) -> ClusterSecretRecord | None:
        """Handle a secret creation event.

        Accepts a ``V1Secret`` or an already converted ``SourceSecret``.
        Returns the record handed to the writer, or None when the secret
        is not owned by the provisioner or processing failed before the
        write.
        """
        if isinstance(secret, SourceSecret):
            name, namespace, owners = secret.name, secret.namespace, secret.owner_references
        else:
            metadata = secret.metadata
            name, namespace = metadata.name, metadata.namespace
            owners = metadata.owner_references or []

        if not any(ref.kind == self.provisioner_kind for ref in owners):
            logger.debug(
                "Ignoring secret without provisioner owner",
                secret_name=name,
                secret_namespace=namespace,
            )
            return None

        # Payload is decoded only for provisioner secrets
        source = secret if isinstance(secret, SourceSecret) else SourceSecret.from_k8s(secret)
        owner = source.owner_of_kind(self.provisioner_kind)

        with EventContextManager(
            secret_name=source.name,
            secret_namespace=source.namespace,
            owner=owner.name,
        ):
            logger.info("Found secret for cluster", cluster=owner.name)
            return self._process(source)

    def _process(self, source: SourceSecret) -> ClusterSecretRecord | None:
        try:
            creds = self.extractor.extract(source.data)
            record = self.builder.build(creds)
        except ClusterSyncError as e:
            logger.error("Dropping secret event", error=str(e), error_type=type(e).__name__)
            return None

        try:
            created = self.writer.create(record)
        except RecordWriteError as e:
            logger.error(
                "Failed to write cluster secret",
                name=record.name,
                namespace=record.namespace,
                error=str(e),
                status=e.status,
            )
            return record

        logger.info(
            "Added cluster",
            name=created,
            namespace=record.namespace,
            cluster_name=record.cluster_name,
        )
        return record
