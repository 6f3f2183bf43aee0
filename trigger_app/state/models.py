"""
State machine data models for the one-shot price trigger.

This module defines immutable data structures for the trigger configuration,
the per-session fired flags and the decisions produced by evaluation.
"""

from dataclasses import dataclass, replace

from ..data.models import Side


@dataclass(frozen=True)
class TriggerConfig:
    """Trigger threshold, fixed for the lifetime of a session."""
    trigger_price: float


@dataclass(frozen=True)
class SessionState:
    """Per-side fired flags for a single session."""

    buy_fired: bool = False
    sell_fired: bool = False

    @property
    def is_exhausted(self) -> bool:
        """True once both sides have fired; no further decisions are possible."""
        return self.buy_fired and self.sell_fired

    def with_fired(self, side: Side) -> "SessionState":
        """Create new state with the given side marked as fired."""
        if side is Side.BUY:
            return replace(self, buy_fired=True)
        return replace(self, sell_fired=True)


@dataclass(frozen=True)
class TriggerDecision:
    """Side and market price of a newly satisfied trigger condition."""
    side: Side
    price: float
