"""Argo CD cluster secret construction."""

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from shared.models import (
    ArgoClusterConfig,
    AuthConfig,
    ClusterSecretRecord,
    TLSClientConfig,
)

from .errors import RecordSerializationError
from .extractor import ExtractedCredentials

DEFAULT_CLUSTER_NAME_PREFIX = "gke-"


def external_cluster_name(cluster_name: str, prefix: str = DEFAULT_CLUSTER_NAME_PREFIX) -> str:
    """Name under which the cluster is registered in Argo CD.

    Plain concatenation; the result is not checked against DNS label rules.
    """
    return prefix + cluster_name


def cluster_secret_name(local_namespace: str, cluster_name: str) -> str:
    """Name of the cluster secret in the Argo CD namespace."""
    return f"{local_namespace}-{cluster_name}"


class CredentialRecordBuilder:
    """Builds cluster secret records from extracted credentials."""

    def __init__(
        self,
        local_namespace: str,
        target_namespace: str = "argocd",
        cluster_name_prefix: str = DEFAULT_CLUSTER_NAME_PREFIX,
    ):
        self.local_namespace = local_namespace
        self.target_namespace = target_namespace
        self.cluster_name_prefix = cluster_name_prefix

    def build_config(self, creds: ExtractedCredentials) -> ArgoClusterConfig:
        return ArgoClusterConfig(
            tls_client_config=TLSClientConfig(
                insecure=creds.insecure,
                ca_data=creds.ca_data,
            ),
            auth_config=AuthConfig(cluster_name=creds.cluster_name),
        )

    def build(self, creds: ExtractedCredentials) -> ClusterSecretRecord:
        """Assemble the cluster secret record.

        Raises:
            RecordSerializationError: The config could not be serialized.
        """
        try:
            config_json = self.build_config(creds).to_json()
        except (ValidationError, PydanticSerializationError) as e:
            raise RecordSerializationError(f"Cannot serialize cluster config: {e}") from e

        return ClusterSecretRecord(
            name=cluster_secret_name(self.local_namespace, creds.cluster_name),
            namespace=self.target_namespace,
            config=config_json,
            cluster_name=external_cluster_name(creds.cluster_name, self.cluster_name_prefix),
            server=creds.server,
        )
