"""Sink interface shared by the order intent destinations."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import structlog

from ..orders.models import OrderIntent


class DeliveryStatus(Enum):
    """Outcome of handing an intent to a destination."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DeliveryResult:
    """What happened to one intent at one destination."""
    status: DeliveryStatus
    message: Optional[str] = None
    attempts: int = 1
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status == DeliveryStatus.SUCCESS


class BaseIntentDelivery(ABC):
    """
    One destination for order intents.

    deliver() reports I/O problems in the returned result instead of raising,
    so a failed write is an outcome to act on, not an exception.
    """

    def __init__(self, name: str, config: Any):
        self.name = name
        self.config = config
        self.logger = structlog.get_logger(__name__).bind(destination=name)
        self.delivered_count = 0
        self.failed_count = 0

    @abstractmethod
    def deliver(self, intent: OrderIntent) -> DeliveryResult:
        """Write one intent to the destination."""

    @abstractmethod
    def health_check(self) -> bool:
        """Check whether the destination can currently accept intents."""

    def deliver_with_retry(
        self,
        intent: OrderIntent,
        retry_attempts: int = 0,
        retry_delay: float = 1.0
    ) -> DeliveryResult:
        """
        Deliver one intent, repeating failed attempts.

        Args:
            intent: Order intent to deliver
            retry_attempts: Extra attempts after the first failure
            retry_delay: Seconds to wait between attempts

        Returns:
            The last attempt's result, with the number of attempts made
        """
        result = self.deliver(intent)
        attempts = 1

        while not result.ok and attempts <= retry_attempts:
            self.logger.warning(
                "Delivery attempt failed, retrying",
                side=intent.side.value,
                attempt=attempts,
                retry_delay=retry_delay,
                error=result.message
            )
            time.sleep(retry_delay)
            result = self.deliver(intent)
            attempts += 1

        result.attempts = attempts
        if result.ok:
            self.delivered_count += 1
        else:
            self.failed_count += 1
        return result

    def get_stats(self) -> dict[str, Any]:
        """Get delivery statistics."""
        return {
            "name": self.name,
            "delivered": self.delivered_count,
            "failed": self.failed_count,
        }
