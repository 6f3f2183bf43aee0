"""Standard output intent delivery mechanism."""

import sys
from datetime import datetime, timezone

import orjson

from ..config.intent_delivery import StdoutDeliveryConfig
from ..orders.models import OrderIntent
from .base import BaseIntentDelivery, DeliveryResult, DeliveryStatus


class StdoutIntentDelivery(BaseIntentDelivery):
    """Prints intents to stdout, either as a readable line or as bare JSON."""

    def __init__(self, name: str, config: StdoutDeliveryConfig):
        super().__init__(name, config)
        self.config: StdoutDeliveryConfig = config

    def deliver(self, intent: OrderIntent) -> DeliveryResult:
        try:
            print(self._format_intent(intent), file=sys.stdout, flush=True)
        except (OSError, ValueError) as e:
            self.logger.error(
                "Failed to print intent to stdout",
                side=intent.side.value,
                error=str(e)
            )
            return DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"Stdout error: {e}",
                error=e
            )

        self.logger.debug("Intent printed to stdout", side=intent.side.value, price=intent.price_text)
        return DeliveryResult(status=DeliveryStatus.SUCCESS, message="Printed to stdout")

    def _format_intent(self, intent: OrderIntent) -> str:
        if self.config.format == "pretty":
            output = f"Prepared payload for {intent.side.value} order: {intent.to_json()}"
            if self.config.include_timestamp:
                output = f"[{datetime.now(timezone.utc).isoformat()}] {output}"
            return output

        if self.config.include_timestamp:
            return orjson.dumps({
                "type": intent.side.value,
                "price": orjson.Fragment(intent.price_text),
                "stdout_timestamp": datetime.now(timezone.utc).isoformat(),
            }).decode()
        return intent.to_json()

    def health_check(self) -> bool:
        """Check if stdout is available."""
        try:
            return sys.stdout.writable()
        except (OSError, ValueError):
            return False
