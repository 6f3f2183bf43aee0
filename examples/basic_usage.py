#!/usr/bin/env python3
"""
Basic Usage Example - Price Trigger Session

This script demonstrates the price trigger pipeline with simulated trade
frames, without connecting to the exchange. It shows how to:
- Create a stream session with a trigger price and a sink
- Feed raw frames, including ones without a price
- Observe the at-most-once buy and sell intents

Run: python examples/basic_usage.py
"""

import json
import time
from typing import Any, Dict, List

from trigger_app.logging.config import configure_logging
from trigger_app.orders.models import OrderIntent
from trigger_app.session import StreamSession


def create_trade_frame(price: float, symbol: str = "btcinr") -> str:
    """Create a WazirX-format trade frame."""
    frame: Dict[str, Any] = {
        "stream": f"{symbol}@trade",
        "data": {
            "E": int(time.time() * 1000),
            "s": symbol,
            "price": str(price),
            "q": "0.001",
        },
    }
    return json.dumps(frame)


def main():
    """Main demonstration function."""
    configure_logging(level="WARNING")

    print("🚀 Price Trigger - Basic Usage Demo")
    print("=" * 60)

    trigger_price = 100.0
    received: List[OrderIntent] = []

    def sink(intent: OrderIntent) -> None:
        print(f"   🚨 Prepared payload for {intent.side.value} order: {intent.to_json()}")
        received.append(intent)

    print(f"1. Creating session with trigger price {trigger_price}")
    session = StreamSession(trigger_price, sink=sink)
    print()

    frames = [
        ("Subscription acknowledgement", '{"event":"subscribed","streams":["btcinr@trade"]}'),
        ("Price above trigger", create_trade_frame(105.0)),
        ("Price at trigger", create_trade_frame(100.0)),
        ("Price below trigger (buy already fired)", create_trade_frame(98.0)),
        ("Price above trigger (sell already fired)", create_trade_frame(120.0)),
        ("Broken frame", "{not json"),
    ]

    print("2. Feeding frames...")
    for description, frame in frames:
        print(f"   {description}")
        intent = session.on_message(frame)
        if intent is None:
            print("   No intent")
    print()

    stats = session.get_stats()
    print("3. Final session stats:")
    print(f"   Messages: {stats['messages']}")
    print(f"   Dropped: {stats['dropped']}")
    print(f"   Intents: {[str(i) for i in received]}")
    print(f"   Complete: {session.is_complete}")


if __name__ == "__main__":
    main()
