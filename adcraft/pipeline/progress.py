"""
Progress delivery.

The pipeline reports progress to a sink. A ``ProgressRegistry`` holds one
sink per campaign so that concurrently running campaigns, each registered by
its own listener, only see their own events.
"""

import threading
from typing import Callable, Dict, Optional

from adcraft.core.logging_config import get_logger
from adcraft.pipeline.models import ProgressEvent

# Initialize logger
logger = get_logger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


class ProgressSink:
    """
    Receives progress events for a campaign run.
    """

    def emit(self, event: ProgressEvent) -> None:
        raise NotImplementedError


class CallbackSink(ProgressSink):
    """Forwards events to a plain callable."""

    def __init__(self, callback: ProgressCallback):
        self.callback = callback

    def emit(self, event: ProgressEvent) -> None:
        self.callback(event)


class ProgressRegistry:
    """
    Thread-safe map of campaign id to progress sink.

    Registering a campaign that already has a sink replaces it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._sinks: Dict[str, ProgressSink] = {}

    def register(self, campaign_id: str, sink: ProgressSink) -> None:
        with self._lock:
            if campaign_id in self._sinks:
                logger.debug(f"Replacing progress sink for campaign {campaign_id}")
            self._sinks[campaign_id] = sink

    def unregister(self, campaign_id: str) -> None:
        with self._lock:
            self._sinks.pop(campaign_id, None)

    def get(self, campaign_id: str) -> Optional[ProgressSink]:
        with self._lock:
            return self._sinks.get(campaign_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sinks)


class RegistrySink(ProgressSink):
    """
    Routes each event to the sink registered for its campaign.

    Events for campaigns with no registered sink are dropped.
    """

    def __init__(self, registry: ProgressRegistry):
        self.registry = registry

    def emit(self, event: ProgressEvent) -> None:
        sink = self.registry.get(event.campaign_id)
        if sink is None:
            logger.debug(f"No progress sink registered for campaign {event.campaign_id}, dropping event")
            return
        sink.emit(event)
