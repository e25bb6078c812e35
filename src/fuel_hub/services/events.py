"""In-process change notification for shared state."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from fuel_hub.domain.events import ChangeEvent

_logger = logging.getLogger(__name__)

Subscriber = Callable[[ChangeEvent], None]


@dataclass
class _Subscription:
    callback: Subscriber
    event_type: type | None


@dataclass
class ChangeNotifier:
    """Delivers change events to subscribers synchronously, in order."""

    _subscriptions: list[_Subscription] = field(default_factory=list)

    def subscribe(
        self, callback: Subscriber, event_type: type | None = None
    ) -> Callable[[], None]:
        """Register a callback and return a function that removes it.

        When ``event_type`` is given the callback only receives events of
        that type.
        """
        subscription = _Subscription(callback=callback, event_type=event_type)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

        return unsubscribe

    def publish(self, event: ChangeEvent) -> None:
        """Deliver an event to every matching subscriber."""
        for subscription in list(self._subscriptions):
            if subscription.event_type is not None and not isinstance(
                event, subscription.event_type
            ):
                continue
            try:
                subscription.callback(event)
            except Exception:
                _logger.exception(
                    "Change subscriber failed",
                    extra={"event_type": type(event).__name__},
                )
