"""Unit tests for Pydantic models."""

import base64
import json

import pytest
import yaml
from kubernetes import client

from shared.models import (
    ArgoClusterConfig,
    AuthConfig,
    ClusterSecretRecord,
    KubeConfig,
    SourceSecret,
    TLSClientConfig,
    WatchEvent,
    WatchEventType,
)


class TestKubeConfig:
    def test_parse_full_document(self, kubeconfig_yaml):
        config = KubeConfig.from_yaml(kubeconfig_yaml)

        assert config.current_context == "my-cluster"
        assert config.api_version == "v1"
        assert config.clusters[0].cluster.server == "https://34.1.2.3"
        assert config.clusters[0].cluster.certificate_authority_data == "Y2EtZGF0YQ=="
        assert config.users[0].user.token == "abc123"

        assert config.context().context.cluster == "my-cluster"
        assert config.context("missing") is None

    def test_empty_document(self):
        assert KubeConfig.from_yaml(b"").current_context == ""

    def test_null_fields(self):
        config = KubeConfig.from_yaml("current-context: null\nclusters: null\n")

        assert config.current_context == ""
        assert config.clusters == []

    def test_unknown_fields_ignored(self):
        config = KubeConfig.from_yaml("current-context: a\nextensions: [1, 2]\n")

        assert config.current_context == "a"

    def test_non_mapping_rejected(self):
        with pytest.raises(ValueError):
            KubeConfig.from_yaml("- one\n- two\n")

    def test_invalid_yaml_rejected(self):
        with pytest.raises(yaml.YAMLError):
            KubeConfig.from_yaml("current-context: 'unterminated")

    def test_wrong_type_rejected(self):
        with pytest.raises(ValueError):
            KubeConfig.from_yaml("current-context: 42\n")


class TestSourceSecret:
    def test_from_k8s_decodes_data(self):
        secret = client.V1Secret(
            metadata=client.V1ObjectMeta(
                name="conn",
                namespace="infra",
                uid="u-1",
                owner_references=[
                    client.V1OwnerReference(
                        api_version="compute.gcp.crossplane.io/v1alpha3",
                        kind="GKECluster",
                        name="cluster-a",
                        uid="o-1",
                    )
                ],
            ),
            data={"clusterCA": base64.b64encode(b"\xaa\xbb").decode(), "empty": ""},
        )

        source = SourceSecret.from_k8s(secret)

        assert source.name == "conn"
        assert source.namespace == "infra"
        assert source.data == {"clusterCA": b"\xaa\xbb", "empty": b""}
        assert source.owner_of_kind("GKECluster").name == "cluster-a"
        assert source.owner_of_kind("OtherKind") is None

    def test_from_k8s_without_owners_or_data(self):
        secret = client.V1Secret(metadata=client.V1ObjectMeta(name="plain"))

        source = SourceSecret.from_k8s(secret)

        assert source.owner_references == []
        assert source.data == {}


class TestArgoClusterConfig:
    def test_defaults(self):
        config = ArgoClusterConfig()

        assert json.loads(config.to_json()) == {
            "bearerToken": "",
            "tlsClientConfig": {"insecure": False, "caData": ""},
            "authConfig": {"clusterName": ""},
        }

    def test_field_order(self):
        config = ArgoClusterConfig(
            tls_client_config=TLSClientConfig(ca_data="qrs="),
            auth_config=AuthConfig(cluster_name="prod"),
        )

        assert list(json.loads(config.to_json())) == [
            "bearerToken",
            "tlsClientConfig",
            "authConfig",
        ]

    def test_parse_by_alias(self):
        config = ArgoClusterConfig.model_validate(
            {"tlsClientConfig": {"caData": "x", "insecure": True}, "authConfig": {"clusterName": "c"}}
        )

        assert config.tls_client_config.insecure is True
        assert config.auth_config.cluster_name == "c"


class TestClusterSecretRecord:
    def test_argocd_labels(self):
        record = ClusterSecretRecord(
            name="ns-prod", namespace="argocd", config="{}", cluster_name="gke-prod"
        )

        assert record.labels == {"argocd.argoproj.io/secret-type": "cluster"}
        assert record.annotations == {"managed-by": "argocd.argoproj.io"}
        assert record.secret_data() == {
            "config": b"{}",
            "name": b"gke-prod",
            "server": b"",
        }


class TestWatchEvent:
    def test_from_stream(self):
        event = WatchEvent.from_stream({"type": "ADDED", "object": "obj", "raw_object": {"a": 1}})

        assert event.type == WatchEventType.ADDED
        assert event.obj == "obj"

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            WatchEvent.from_stream({"type": "SOMETHING", "object": None})
