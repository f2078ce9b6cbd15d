"""Secret watch loop.

Watches secrets across all namespaces and hands creation events to the
event handler on the watching thread. Modifications are ignored; deletions
only forget the secret's UID.

Like an informer, the initial listing is delivered as creation events and
each secret UID is delivered once, so re-listing after an expired watch
does not replay secrets that were already handled.
"""

import threading
from collections.abc import Callable
from typing import Any

from kubernetes import client, watch
from kubernetes.client.rest import ApiException

from shared.models import WatchEvent, WatchEventType
from shared.observability import get_logger

from .handler import SecretEventHandler

logger = get_logger(__name__)


class SecretWatcher:
    """Watches secrets and dispatches ADDED events."""

    def __init__(
        self,
        core_api: client.CoreV1Api,
        handler: SecretEventHandler,
        timeout_seconds: int = 300,
        watch_factory: Callable[[], watch.Watch] = watch.Watch,
    ):
        self.core_api = core_api
        self.handler = handler
        self.timeout_seconds = timeout_seconds
        self._watch_factory = watch_factory
        self._stop_event = threading.Event()
        self._watch: watch.Watch | None = None
        self._resource_version: str | None = None
        self._seen_uids: set[str] = set()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run(self) -> None:
        """Watch until stopped.

        Blocks the calling thread. API failures other than an expired
        resource version are logged and re-raised; there is no reconnect.
        """
        logger.info("Starting secret watch", timeout_seconds=self.timeout_seconds)
        self._running = True
        try:
            while not self._stop_event.is_set():
                self._watch_once()
        finally:
            self._running = False
            logger.info("Secret watch stopped")

    def stop(self) -> None:
        """Signal the watch loop to stop.

        Does not wait for an event that is being handled.
        """
        self._stop_event.set()
        if self._watch is not None:
            self._watch.stop()

    def _watch_once(self) -> None:
        w = self._watch_factory()
        self._watch = w

        kwargs: dict[str, Any] = {"timeout_seconds": self.timeout_seconds}
        if self._resource_version:
            kwargs["resource_version"] = self._resource_version

        try:
            for item in w.stream(self.core_api.list_secret_for_all_namespaces, **kwargs):
                if self._stop_event.is_set():
                    break
                self.dispatch(WatchEvent.from_stream(item))
        except ApiException as e:
            if e.status == 410:
                logger.warning("Watch resource version expired, re-listing secrets")
                self._resource_version = None
                return
            logger.error("Secret watch failed", status=e.status, reason=e.reason)
            raise
        finally:
            w.stop()
            self._watch = None

    def dispatch(self, event: WatchEvent) -> None:
        """Route one watch event."""
        obj = event.obj
        metadata = getattr(obj, "metadata", None)
        if metadata is None:
            return

        if metadata.resource_version:
            self._resource_version = metadata.resource_version

        uid = metadata.uid
        if event.type == WatchEventType.ADDED:
            if uid and uid in self._seen_uids:
                return
            if uid:
                self._seen_uids.add(uid)
            try:
                self.handler.on_added(obj)
            except Exception:
                # One bad secret must not end the watch
                logger.exception(
                    "Unhandled error processing secret, dropping event",
                    secret_name=metadata.name,
                    secret_namespace=metadata.namespace,
                )
        elif event.type == WatchEventType.DELETED:
            self._seen_uids.discard(uid)
