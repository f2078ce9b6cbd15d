"""Argo CD cluster registration models.

Argo CD discovers clusters from secrets in its namespace labelled
``argocd.argoproj.io/secret-type: cluster``. The ``config`` key of such a
secret holds the JSON document modelled by ``ArgoClusterConfig``.
"""

from pydantic import Field

from .base import SyncBaseModel

SECRET_TYPE_LABEL = "argocd.argoproj.io/secret-type"
SECRET_TYPE_CLUSTER = "cluster"
MANAGED_BY_ANNOTATION = "managed-by"
MANAGED_BY_ARGOCD = "argocd.argoproj.io"


class TLSClientConfig(SyncBaseModel):
    """TLS settings for the cluster API connection."""

    insecure: bool = False
    ca_data: str = Field(default="", alias="caData", description="Base64 CA bundle")


class AuthConfig(SyncBaseModel):
    cluster_name: str = Field(default="", alias="clusterName")


class ArgoClusterConfig(SyncBaseModel):
    """Connection config stored under the ``config`` key.

    Field order is the serialization order.
    """

    bearer_token: str = Field(default="", alias="bearerToken")
    tls_client_config: TLSClientConfig = Field(
        default_factory=TLSClientConfig, alias="tlsClientConfig"
    )
    auth_config: AuthConfig = Field(default_factory=AuthConfig, alias="authConfig")

    def to_json(self) -> str:
        """Serialize to compact JSON using wire field names."""
        return self.model_dump_json(by_alias=True)


class ClusterSecretRecord(SyncBaseModel):
    """Cluster secret to be created in the Argo CD namespace."""

    name: str
    namespace: str
    labels: dict[str, str] = Field(
        default_factory=lambda: {SECRET_TYPE_LABEL: SECRET_TYPE_CLUSTER}
    )
    annotations: dict[str, str] = Field(
        default_factory=lambda: {MANAGED_BY_ANNOTATION: MANAGED_BY_ARGOCD}
    )
    type: str = "Opaque"
    config: str = Field(description="Serialized ArgoClusterConfig")
    cluster_name: str = Field(description="Cluster name registered in Argo CD")
    server: str = Field(default="", description="Cluster API server address")

    def secret_data(self) -> dict[str, bytes]:
        """Secret payload keyed the way Argo CD reads it."""
        return {
            "config": self.config.encode(),
            "name": self.cluster_name.encode(),
            "server": self.server.encode(),
        }
