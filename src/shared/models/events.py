"""Watch event models."""

from enum import Enum
from typing import Any

from .base import SyncBaseModel


class WatchEventType(str, Enum):
    """Event types delivered by a Kubernetes watch."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    BOOKMARK = "BOOKMARK"
    ERROR = "ERROR"


class WatchEvent(SyncBaseModel):
    """A single event from a watch stream.

    ``obj`` keeps the deserialized client object (``V1Secret`` for secret
    watches).
    """

    type: WatchEventType
    obj: Any = None

    @classmethod
    def from_stream(cls, event: dict[str, Any]) -> "WatchEvent":
        """Build from an item yielded by ``kubernetes.watch.Watch.stream``."""
        return cls(
            type=event["type"],
            obj=event.get("object"),
        )
