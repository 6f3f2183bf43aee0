"""Fan-out of order intents to the configured delivery destinations."""

from typing import Optional

import structlog

from ..config.intent_delivery import (
    DeliveryDestination,
    DeliveryMethod,
    IntentDeliveryConfig,
    get_default_delivery_config,
)
from ..errors import DeliveryError
from ..orders.models import OrderIntent
from .base import BaseIntentDelivery, DeliveryResult, DeliveryStatus
from .file_delivery import FileIntentDelivery
from .stdout_delivery import StdoutIntentDelivery

logger = structlog.get_logger(__name__)


def create_delivery_handler(destination: DeliveryDestination) -> BaseIntentDelivery:
    """
    Build the delivery handler for a destination.

    Raises:
        DeliveryError: If the destination cannot be set up
    """
    try:
        if destination.method == DeliveryMethod.FILE_OUTPUT:
            return FileIntentDelivery(destination.name, destination.config)
        if destination.method == DeliveryMethod.STDOUT:
            return StdoutIntentDelivery(destination.name, destination.config)
    except (OSError, ValueError) as e:
        raise DeliveryError(
            f"Failed to initialize delivery handler {destination.name}: {e}",
            delivery_method=destination.method.value
        ) from e

    raise DeliveryError(
        f"Unsupported delivery method: {destination.method}",
        delivery_method=str(destination.method)
    )


class IntentDispatcher:
    """
    Session sink that hands each intent to every enabled destination.

    Delivery failures are logged, never raised: once the trigger engine has
    fired, the intent exists whether or not a destination accepted it.
    """

    def __init__(self, delivery_config: Optional[IntentDeliveryConfig] = None):
        self.logger = logger
        self.delivery_config = delivery_config or get_default_delivery_config()
        self.delivery_handlers: dict[str, BaseIntentDelivery] = {}
        self.results: list[tuple[str, DeliveryResult]] = []

        self._init_delivery_handlers()

    def _init_delivery_handlers(self) -> None:
        if not self.delivery_config.enabled:
            return

        for destination in self.delivery_config.destinations:
            if not destination.enabled:
                continue

            self.delivery_handlers[destination.name] = create_delivery_handler(destination)
            self.logger.info("Initialized delivery handler", destination=destination.name)

    def __call__(self, intent: OrderIntent) -> None:
        self.dispatch(intent)

    def dispatch(self, intent: OrderIntent) -> list[DeliveryResult]:
        """Deliver one intent to every destination."""
        results = []

        for name, handler in self.delivery_handlers.items():
            result = self._deliver(name, handler, intent)
            results.append(result)
            self.results.append((name, result))

        return results

    def _deliver(self, name: str, handler: BaseIntentDelivery, intent: OrderIntent) -> DeliveryResult:
        try:
            result = handler.deliver_with_retry(
                intent,
                retry_attempts=self.delivery_config.failure_retry_attempts,
                retry_delay=self.delivery_config.failure_retry_delay_seconds
            )
        except Exception as e:
            # A broken destination must not keep the others from receiving the intent
            self.logger.error(
                "Delivery handler raised",
                destination=name,
                side=intent.side.value,
                error=str(e),
                exc_info=True
            )
            return DeliveryResult(status=DeliveryStatus.FAILED, message=f"Handler error: {e}", error=e)

        if result.ok:
            self.logger.info(
                "Intent delivered successfully",
                destination=name,
                side=intent.side.value,
                attempts=result.attempts
            )
        else:
            self.logger.error(
                "Intent delivery failed",
                destination=name,
                side=intent.side.value,
                message=result.message,
                attempts=result.attempts
            )
        return result

    def health_check(self) -> dict[str, bool]:
        return {name: handler.health_check() for name, handler in self.delivery_handlers.items()}

    def get_stats(self) -> dict[str, dict]:
        return {name: handler.get_stats() for name, handler in self.delivery_handlers.items()}
