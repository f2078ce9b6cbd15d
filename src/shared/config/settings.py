"""Configuration management with Pydantic Settings.

Environment variables are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)

Settings are built once at process start and handed to the components
that need them; nothing below reads the environment on its own afterwards.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Mounted by the kubelet into every pod with a service account token
SERVICE_ACCOUNT_NAMESPACE_FILE = "/var/run/secrets/kubernetes.io/serviceaccount/namespace"
DEFAULT_NAMESPACE = "default"


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class MissingKubeconfigPolicy(str, Enum):
    """What to do with a provisioner secret that carries no kubeconfig.

    PROCEED keeps going with an empty cluster name, ABORT drops the event
    the same way a malformed kubeconfig does.
    """

    PROCEED = "proceed"
    ABORT = "abort"


def resolve_local_namespace(
    override: str | None = None,
    namespace_file: str | Path = SERVICE_ACCOUNT_NAMESPACE_FILE,
    default: str = DEFAULT_NAMESPACE,
) -> str:
    """Resolve the namespace this process runs in.

    Order: explicit override (POD_NAMESPACE via the downward API), then the
    service account namespace file, then ``default``.
    """
    if override is not None:
        return override

    try:
        ns = Path(namespace_file).read_text().strip()
    except OSError:
        ns = ""
    if ns:
        return ns

    return default


class KubernetesSettings(BaseSettings):
    """Kubernetes API connection settings."""

    model_config = SettingsConfigDict(env_prefix="", extra="ignore")

    kubeconfig: str | None = Field(
        default=None,
        alias="KUBECONFIG",
        description="Path to a kubeconfig file (in-cluster config when unset)",
    )
    watch_timeout_seconds: int = Field(
        default=300,
        alias="WATCH_TIMEOUT_SECONDS",
        description="Server-side timeout of a single watch call",
    )

    @field_validator("watch_timeout_seconds")
    @classmethod
    def validate_watch_timeout(cls, v: int) -> int:
        """Ensure the watch timeout is positive."""
        if v <= 0:
            raise ValueError("watch_timeout_seconds must be positive")
        return v


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="cluster-secret-sync", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        alias="ENV",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Logging format")

    # Server configuration (health checks)
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8080, description="Server bind port")

    # Nested settings
    kubernetes: KubernetesSettings = Field(default_factory=KubernetesSettings)


class ClusterSyncSettings(Settings):
    """Settings specific to the cluster secret sync service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    local_namespace: str | None = Field(
        default=None,
        alias="POD_NAMESPACE",
        description="Namespace this process runs in (resolved at startup when unset)",
    )
    namespace_file: str = Field(
        default=SERVICE_ACCOUNT_NAMESPACE_FILE,
        description="Service account namespace file used as fallback",
    )
    provisioner_kind: str = Field(
        default="GKECluster",
        description="Owner reference kind that marks a provisioner secret",
    )
    target_namespace: str = Field(
        default="argocd",
        description="Namespace the Argo CD cluster secrets are written to",
    )
    # TODO: confirm with Argo CD owners whether gke_<project>_<region>_<name> is required
    cluster_name_prefix: str = Field(
        default="gke-",
        description="Literal prefix of the cluster name registered in Argo CD",
    )
    writer_enabled: bool = Field(
        default=False,
        description="Create cluster secrets (dry-run logging when disabled)",
    )
    missing_kubeconfig_policy: MissingKubeconfigPolicy = Field(
        default=MissingKubeconfigPolicy.PROCEED,
        description="Handling of provisioner secrets without a kubeconfig entry",
    )

    @model_validator(mode="after")
    def resolve_namespace(self) -> "ClusterSyncSettings":
        """Fill in the local namespace once, from file or default."""
        if self.local_namespace is None:
            self.local_namespace = resolve_local_namespace(
                namespace_file=self.namespace_file,
            )
        return self


@lru_cache
def get_settings() -> ClusterSyncSettings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return ClusterSyncSettings()
