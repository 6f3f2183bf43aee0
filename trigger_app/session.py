"""
Streaming session coordinator.

Wires the per-frame pipeline together:
Raw frame → MessageParser → TriggerEngine → OrderIntentBuilder → sink
"""

import threading
from typing import Any, Callable, Optional, Union

import structlog

from .data.parsers import MalformedMessageError, MessageParser, MissingPriceError
from .orders.builder import OrderIntentBuilder
from .orders.models import OrderIntent
from .state.machine import TriggerEngine

logger = structlog.get_logger(__name__)

IntentSink = Callable[[OrderIntent], None]


class StreamSession:
    """
    One trigger session over a market data stream.

    The transport calls on_message() once per frame, in delivery order.
    Emitted intents are passed to the sink synchronously from inside
    on_message(); over the session lifetime that happens at most twice.

    on_message() may be called from several threads. The fired flags are
    guarded by the engine and the session counters by their own lock, so
    get_stats() always returns a consistent snapshot.
    """

    def __init__(
        self,
        trigger_price: float,
        sink: IntentSink,
        parser: Optional[MessageParser] = None,
        builder: Optional[OrderIntentBuilder] = None,
    ) -> None:
        self.logger = logger
        self.engine = TriggerEngine(trigger_price)
        self.parser = parser or MessageParser()
        self.builder = builder or OrderIntentBuilder()
        self.sink = sink

        self.intents: list[OrderIntent] = []
        self._message_count = 0
        self._dropped_count = 0
        self._sink_error_count = 0
        self._stats_lock = threading.Lock()

        self.logger.info("Stream session initialized", trigger_price=self.engine.trigger_price)

    @property
    def is_complete(self) -> bool:
        """True once both buy and sell intents have been emitted."""
        return self.engine.is_exhausted

    def on_message(self, raw: Union[str, bytes]) -> Optional[OrderIntent]:
        """
        Process one inbound frame.

        Args:
            raw: Frame text as received from the transport

        Returns:
            The intent emitted for this frame, None otherwise
        """
        with self._stats_lock:
            self._message_count += 1
        self.logger.debug("Received frame", frame=raw)

        try:
            sample = self.parser.parse(raw)
        except MissingPriceError as e:
            self._record_drop()
            self.logger.warning("Received message without price", frame=raw, error=str(e))
            return None
        except MalformedMessageError as e:
            self._record_drop()
            self.logger.warning("Received malformed message", frame=raw, error=str(e))
            return None

        decision = self.engine.evaluate(sample.price)
        if decision is None:
            return None

        intent = self.builder.build_from_decision(decision)
        with self._stats_lock:
            self.intents.append(intent)

        self.logger.info(
            "Prepared order intent",
            side=intent.side.value,
            price=intent.price_text,
            payload=intent.to_json(),
            stream=sample.stream,
            symbol=sample.symbol
        )

        self._emit(intent)
        return intent

    def _emit(self, intent: OrderIntent) -> None:
        """Hand an intent to the sink; sink failures never reach the transport."""
        try:
            self.sink(intent)
        except Exception as e:
            with self._stats_lock:
                self._sink_error_count += 1
            self.logger.error(
                "Order intent sink failed",
                side=intent.side.value,
                price=intent.price_text,
                error=str(e),
                exc_info=True
            )

    def _record_drop(self) -> None:
        with self._stats_lock:
            self._dropped_count += 1

    def get_stats(self) -> dict[str, Any]:
        """Get session statistics."""
        state = self.engine.state
        with self._stats_lock:
            counts = {
                "messages": self._message_count,
                "dropped": self._dropped_count,
                "intents": len(self.intents),
                "sink_errors": self._sink_error_count,
            }
        return {
            "trigger_price": self.engine.trigger_price,
            **counts,
            "buy_fired": state.buy_fired,
            "sell_fired": state.sell_fired,
            "parsing": self.parser.get_stats(),
        }
