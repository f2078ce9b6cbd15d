"""Pytest configuration and shared fixtures."""

import os

import pytest

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"
os.environ.setdefault("POD_NAMESPACE", "test-namespace")


@pytest.fixture
def kubeconfig_yaml() -> str:
    """Kubeconfig as written by the cluster provisioner."""
    return """\
apiVersion: v1
kind: Config
clusters:
- cluster:
    certificate-authority-data: Y2EtZGF0YQ==
    server: https://34.1.2.3
  name: my-cluster
contexts:
- context:
    cluster: my-cluster
    user: my-cluster
  name: my-cluster
current-context: my-cluster
preferences: {}
users:
- name: my-cluster
  user:
    token: abc123
"""


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
