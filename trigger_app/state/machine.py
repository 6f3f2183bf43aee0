"""
Core trigger state machine logic.

This module implements the one-shot crossing rule: each side fires at most
once per session, and the buy condition is always checked before the sell
condition, so a first price exactly at the trigger level fires a buy.
"""

import math
import threading
from typing import Optional

from ..data.models import Side
from ..errors import ConfigurationError
from ..logging.config import get_trigger_logger, log_trigger_decision
from .models import SessionState, TriggerConfig, TriggerDecision


def eval_trigger_tick(
    state: SessionState,
    price: float,
    cfg: TriggerConfig
) -> Optional[TriggerDecision]:
    """
    Decide whether a price newly satisfies a crossing condition.

    Args:
        state: Current fired flags
        price: Latest market price
        cfg: Trigger configuration

    Returns:
        TriggerDecision for the side that should fire, None otherwise
    """
    # 1) Buy at or below the trigger level
    if not state.buy_fired and price <= cfg.trigger_price:
        return TriggerDecision(side=Side.BUY, price=price)

    # 2) Sell at or above the trigger level
    if not state.sell_fired and price >= cfg.trigger_price:
        return TriggerDecision(side=Side.SELL, price=price)

    return None


class TriggerEngine:
    """
    Owns the trigger threshold and fired flags for one streaming session.

    evaluate() is expected to be called in frame arrival order. The
    check-and-set of the fired flags runs under a single lock, so concurrent
    callers still see at most one decision per side.
    """

    def __init__(self, trigger_price: float) -> None:
        if (isinstance(trigger_price, bool) or not isinstance(trigger_price, (int, float))
                or not math.isfinite(trigger_price) or trigger_price <= 0):
            raise ConfigurationError(
                f"Trigger price must be a finite positive number, got {trigger_price!r}",
                field="trigger_price",
                value=trigger_price
            )

        self.config = TriggerConfig(trigger_price=float(trigger_price))
        self._state = SessionState()
        self._lock = threading.Lock()
        self.logger = get_trigger_logger(__name__).bind(trigger_price=self.config.trigger_price)

    @property
    def trigger_price(self) -> float:
        return self.config.trigger_price

    @property
    def state(self) -> SessionState:
        """Snapshot of the fired flags."""
        return self._state

    @property
    def is_exhausted(self) -> bool:
        return self._state.is_exhausted

    def evaluate(self, price: float) -> Optional[TriggerDecision]:
        """
        Evaluate one price sample.

        Args:
            price: Parsed market price

        Returns:
            TriggerDecision if a side fired on this sample, None otherwise
        """
        with self._lock:
            decision = eval_trigger_tick(self._state, price, self.config)
            if decision is None:
                return None
            self._state = self._state.with_fired(decision.side)

        log_trigger_decision(
            self.logger,
            side=decision.side.value,
            price=decision.price,
            trigger_price=self.config.trigger_price,
            context={
                "buy_fired": self._state.buy_fired,
                "sell_fired": self._state.sell_fired,
            }
        )
        return decision
