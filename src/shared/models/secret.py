"""Source secret models.

Secrets created by a cluster provisioner carry the connection material for
the new cluster under the ``kubeconfig``, ``clusterCA`` and ``endpoint``
keys.
"""

import base64
from typing import Any

from pydantic import Field

from .base import SyncBaseModel

KUBECONFIG_KEY = "kubeconfig"
CLUSTER_CA_KEY = "clusterCA"
ENDPOINT_KEY = "endpoint"


class OwnerReference(SyncBaseModel):
    """Backlink to the object that created a secret."""

    kind: str
    name: str
    api_version: str | None = Field(default=None, alias="apiVersion")
    uid: str | None = None


class SourceSecret(SyncBaseModel):
    """A secret observed on the watch stream.

    ``data`` holds raw bytes; the base64 transport encoding used by the
    Kubernetes API is removed when the model is built from a client object.
    """

    name: str
    namespace: str | None = None
    uid: str | None = None
    owner_references: list[OwnerReference] = Field(default_factory=list)
    data: dict[str, bytes] = Field(default_factory=dict)

    @classmethod
    def from_k8s(cls, secret: Any) -> "SourceSecret":
        """Build from a ``kubernetes.client.V1Secret``."""
        metadata = secret.metadata
        owners = [
            OwnerReference(
                kind=ref.kind,
                name=ref.name,
                api_version=ref.api_version,
                uid=ref.uid,
            )
            for ref in (metadata.owner_references or [])
        ]
        data = {
            key: base64.b64decode(value) if value else b""
            for key, value in (secret.data or {}).items()
        }
        return cls(
            name=metadata.name,
            namespace=metadata.namespace,
            uid=metadata.uid,
            owner_references=owners,
            data=data,
        )

    def owner_of_kind(self, kind: str) -> OwnerReference | None:
        """Return the first owner reference with the given kind."""
        for ref in self.owner_references:
            if ref.kind == kind:
                return ref
        return None
