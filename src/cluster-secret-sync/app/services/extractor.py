"""Credential extraction from provisioner secrets.

Each recognised payload key is handled by its own function. The handlers
run in a fixed order, independent of the payload's key order.
"""

import base64
from collections.abc import Callable, Mapping

import yaml
from pydantic import BaseModel

from shared.config import MissingKubeconfigPolicy
from shared.models import CLUSTER_CA_KEY, ENDPOINT_KEY, KUBECONFIG_KEY, KubeConfig
from shared.observability import get_logger

from .errors import ExtractionError, KubeconfigDecodeError, MissingKubeconfigError

logger = get_logger(__name__)


class ExtractedCredentials(BaseModel):
    """Connection material pulled from one secret."""

    cluster_name: str = ""
    ca_data: str = ""
    insecure: bool = False
    server: str = ""


def _extract_kubeconfig(value: bytes, creds: ExtractedCredentials) -> None:
    try:
        kubeconfig = KubeConfig.from_yaml(value)
    except (yaml.YAMLError, ValueError, RecursionError) as e:
        raise KubeconfigDecodeError(f"Invalid kubeconfig: {e}") from e
    # The provisioner names the context after the cluster
    creds.cluster_name = kubeconfig.current_context


def _extract_cluster_ca(value: bytes, creds: ExtractedCredentials) -> None:
    creds.ca_data = base64.b64encode(value).decode()
    creds.insecure = False


def _extract_endpoint(value: bytes, creds: ExtractedCredentials) -> None:
    try:
        creds.server = value.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ExtractionError(f"Endpoint is not valid UTF-8: {e}") from e


KeyHandler = Callable[[bytes, ExtractedCredentials], None]

KEY_HANDLERS: tuple[tuple[str, KeyHandler], ...] = (
    (KUBECONFIG_KEY, _extract_kubeconfig),
    (CLUSTER_CA_KEY, _extract_cluster_ca),
    (ENDPOINT_KEY, _extract_endpoint),
)


class CredentialExtractor:
    """Reads cluster name, CA data and endpoint from a secret payload."""

    def __init__(
        self,
        missing_kubeconfig_policy: MissingKubeconfigPolicy = MissingKubeconfigPolicy.PROCEED,
    ):
        self.missing_kubeconfig_policy = MissingKubeconfigPolicy(missing_kubeconfig_policy)

    def extract(self, data: Mapping[str, bytes]) -> ExtractedCredentials:
        """Extract connection material.

        Keys other than ``kubeconfig``, ``clusterCA`` and ``endpoint`` are
        ignored. Missing ``clusterCA`` or ``endpoint`` leave their fields at
        the defaults.

        Raises:
            KubeconfigDecodeError: ``kubeconfig`` is present but malformed.
            MissingKubeconfigError: ``kubeconfig`` is absent and the policy
                is ABORT.
            ExtractionError: ``endpoint`` is not valid UTF-8.
        """
        if (
            KUBECONFIG_KEY not in data
            and self.missing_kubeconfig_policy == MissingKubeconfigPolicy.ABORT
        ):
            raise MissingKubeconfigError("Secret has no kubeconfig entry")

        creds = ExtractedCredentials()
        for key, handler in KEY_HANDLERS:
            if key in data:
                handler(data[key], creds)
            else:
                logger.debug("Secret key not present", key=key)

        return creds
