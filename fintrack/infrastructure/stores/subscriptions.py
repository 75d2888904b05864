"""Snapshot subscriber bookkeeping shared by store implementations."""

from collections import defaultdict
from typing import Dict, List, Optional

import structlog

from fintrack.domain.entities import Transaction
from fintrack.domain.interfaces import ErrorCallback, SnapshotCallback

logger = structlog.get_logger(__name__)


class Subscription:
    """A single subscriber to one collection."""

    def __init__(
        self,
        registry: "SubscriberRegistry",
        key: str,
        on_data: SnapshotCallback,
        on_error: Optional[ErrorCallback],
    ):
        self._registry = registry
        self.key = key
        self.on_data = on_data
        self.on_error = on_error
        self.active = True

    def deliver(self, snapshot: List[Transaction]) -> None:
        if not self.active:
            return
        try:
            self.on_data(list(snapshot))
        except Exception as e:
            logger.exception(
                "subscriber_callback_failed",
                collection=self.key,
                error=str(e),
            )

    def fail(self, exc: Exception) -> None:
        if self.active and self.on_error is not None:
            self.on_error(exc)

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self._registry.remove(self)


class SubscriberRegistry:
    """Subscriptions grouped by collection key."""

    def __init__(self):
        self._subscriptions: Dict[str, List[Subscription]] = defaultdict(list)

    def add(
        self,
        key: str,
        on_data: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Subscription:
        subscription = Subscription(self, key, on_data, on_error)
        self._subscriptions[key].append(subscription)
        return subscription

    def remove(self, subscription: Subscription) -> None:
        subscribers = self._subscriptions.get(subscription.key, [])
        if subscription in subscribers:
            subscribers.remove(subscription)
        if not subscribers:
            self._subscriptions.pop(subscription.key, None)

    def has_subscribers(self, key: str) -> bool:
        return bool(self._subscriptions.get(key))

    def publish(self, key: str, snapshot: List[Transaction]) -> None:
        """Push a complete snapshot to every subscriber of a key."""
        for subscription in list(self._subscriptions.get(key, [])):
            subscription.deliver(snapshot)

    def fail(self, key: str, exc: Exception) -> None:
        """Report a delivery failure to every subscriber of a key."""
        for subscription in list(self._subscriptions.get(key, [])):
            subscription.fail(exc)
