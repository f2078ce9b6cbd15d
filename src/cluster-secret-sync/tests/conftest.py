"""Test fixtures for Cluster Secret Sync."""

import base64
import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from kubernetes import client

# Set test environment before importing settings
os.environ.setdefault("POD_NAMESPACE", "team-a")
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"

from app.services import (
    CredentialExtractor,
    CredentialRecordBuilder,
    DryRunRecordWriter,
    SecretEventHandler,
)

SAMPLE_KUBECONFIG = """\
apiVersion: v1
kind: Config
clusters:
- cluster:
    certificate-authority-data: Y2EtZGF0YQ==
    server: https://10.0.0.1
  name: prod
contexts:
- context:
    cluster: prod
    user: prod
  name: prod
current-context: prod
preferences: {}
users:
- name: prod
  user:
    token: secret-token
"""


def _make_secret(
    name: str = "cluster-a-conn",
    namespace: str = "crossplane-system",
    owner_kind: str | None = "GKECluster",
    owner_name: str = "cluster-a",
    data: dict[str, bytes] | None = None,
    uid: str = "uid-1",
    resource_version: str = "100",
) -> client.V1Secret:
    """Build a V1Secret the way the API client deserializes it."""
    owners = None
    if owner_kind is not None:
        owners = [
            client.V1OwnerReference(
                api_version="compute.gcp.crossplane.io/v1alpha3",
                kind=owner_kind,
                name=owner_name,
                uid="owner-uid",
            )
        ]
    return client.V1Secret(
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            uid=uid,
            resource_version=resource_version,
            owner_references=owners,
        ),
        data={k: base64.b64encode(v).decode() for k, v in (data or {}).items()},
        type="Opaque",
    )


@pytest.fixture
def kubeconfig_bytes() -> bytes:
    return SAMPLE_KUBECONFIG.encode()


@pytest.fixture
def provisioner_payload(kubeconfig_bytes) -> dict[str, bytes]:
    return {
        "kubeconfig": kubeconfig_bytes,
        "clusterCA": bytes([0xAA, 0xBB]),
        "endpoint": b"https://10.0.0.1",
    }


class RecordingWriter(DryRunRecordWriter):
    """Dry-run writer that keeps what it was given, for assertions."""

    def __init__(self):
        self.records = []

    def create(self, record):
        self.records.append(record)
        return super().create(record)


@pytest.fixture
def dry_run_writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def handler(dry_run_writer) -> SecretEventHandler:
    return SecretEventHandler(
        provisioner_kind="GKECluster",
        extractor=CredentialExtractor(),
        builder=CredentialRecordBuilder(local_namespace="team-a", target_namespace="argocd"),
        writer=dry_run_writer,
    )


class FakeWatcher:
    """Stand-in for SecretWatcher in HTTP tests."""

    def __init__(self, running: bool = True):
        self.is_running = running


@pytest_asyncio.fixture
async def test_client() -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client (lifespan not run)."""
    from app.main import app

    app.state.watcher = FakeWatcher()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    del app.state.watcher


@pytest.fixture
def secret_factory():
    """Factory for V1Secret objects as delivered by the watch."""
    return _make_secret
