"""Kubernetes API client construction."""

from kubernetes import client, config

from shared.config import KubernetesSettings
from shared.observability import get_logger

logger = get_logger(__name__)


def create_core_api(settings: KubernetesSettings) -> client.CoreV1Api:
    """Create a CoreV1Api client.

    Uses the kubeconfig file from settings when one is set. Otherwise tries
    in-cluster config first and falls back to the default kubeconfig.

    Raises:
        kubernetes.config.ConfigException: No usable configuration found.
    """
    if settings.kubeconfig:
        config.load_kube_config(config_file=settings.kubeconfig)
        logger.info("Loaded kubeconfig", path=settings.kubeconfig)
    else:
        try:
            # Try in-cluster config first
            config.load_incluster_config()
            logger.info("Loaded in-cluster config")
        except config.ConfigException:
            # Fall back to kubeconfig
            config.load_kube_config()
            logger.info("Loaded default kubeconfig")

    return client.CoreV1Api()
