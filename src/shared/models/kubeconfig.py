"""Kubeconfig document models.

Only ``current-context`` is consumed today; the remaining sections are
parsed so that malformed documents are rejected as a whole.
"""

from typing import Any

import yaml
from pydantic import Field, field_validator

from .base import SyncBaseModel


def _none_to_empty(v: Any, empty: Any) -> Any:
    return empty if v is None else v


class ClusterInfo(SyncBaseModel):
    """Cluster connection details."""

    certificate_authority_data: str = Field(default="", alias="certificate-authority-data")
    server: str = ""


class NamedCluster(SyncBaseModel):
    name: str = ""
    cluster: ClusterInfo = Field(default_factory=ClusterInfo)


class ContextInfo(SyncBaseModel):
    cluster: str = ""
    user: str = ""


class NamedContext(SyncBaseModel):
    name: str = ""
    context: ContextInfo = Field(default_factory=ContextInfo)


class UserInfo(SyncBaseModel):
    token: str = ""


class NamedUser(SyncBaseModel):
    name: str = ""
    user: UserInfo = Field(default_factory=UserInfo)


class KubeConfig(SyncBaseModel):
    """A client connection configuration document."""

    api_version: str = Field(default="", alias="apiVersion")
    kind: str = ""
    clusters: list[NamedCluster] = Field(default_factory=list)
    contexts: list[NamedContext] = Field(default_factory=list)
    current_context: str = Field(default="", alias="current-context")
    preferences: dict[str, Any] = Field(default_factory=dict)
    users: list[NamedUser] = Field(default_factory=list)

    @field_validator("api_version", "kind", "current_context", mode="before")
    @classmethod
    def null_string(cls, v: Any) -> Any:
        return _none_to_empty(v, "")

    @field_validator("clusters", "contexts", "users", mode="before")
    @classmethod
    def null_list(cls, v: Any) -> Any:
        return _none_to_empty(v, [])

    @field_validator("preferences", mode="before")
    @classmethod
    def null_mapping(cls, v: Any) -> Any:
        return _none_to_empty(v, {})

    @classmethod
    def from_yaml(cls, raw: bytes | str) -> "KubeConfig":
        """Decode a YAML kubeconfig.

        An empty document decodes to an empty config.

        Raises:
            yaml.YAMLError: The payload is not valid YAML.
            ValueError: The document is not a mapping or has wrongly typed
                fields (pydantic ``ValidationError`` is a ``ValueError``).
        """
        doc = yaml.safe_load(raw)
        if doc is None:
            doc = {}
        if not isinstance(doc, dict):
            raise ValueError(
                f"kubeconfig must be a mapping, got {type(doc).__name__}"
            )
        return cls.model_validate(doc)
