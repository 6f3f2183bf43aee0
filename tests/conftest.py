"""Pytest configuration and shared fixtures."""

import pytest
from typing import Any, Dict, List

import orjson

from trigger_app.logging.config import configure_logging
from trigger_app.orders.models import OrderIntent


@pytest.fixture(scope="session", autouse=True)
def structured_logging() -> None:
    """Route structlog through stdlib logging as JSON so caplog can see it."""
    configure_logging(level="DEBUG", format_json=True)


def make_trade_frame(price: Any, symbol: str = "btcinr") -> str:
    """WazirX-style trade frame carrying the given data.price value."""
    return orjson.dumps({
        "stream": f"{symbol}@trade",
        "data": {
            "E": 1700000000000,
            "s": symbol,
            "t": 123456,
            "price": price,
            "q": "0.0015",
        },
    }).decode()


@pytest.fixture
def trade_frame():
    """Factory for trade frames."""
    return make_trade_frame


@pytest.fixture
def subscribe_ack_frame() -> str:
    """Frame sent by the exchange after a subscription, with no price."""
    return '{"event":"subscribed","streams":["btcinr@trade"]}'


@pytest.fixture
def collected_intents() -> List[OrderIntent]:
    return []


@pytest.fixture
def collecting_sink(collected_intents):
    """Sink that records every intent it receives."""
    return collected_intents.append


@pytest.fixture
def sample_app_config() -> Dict[str, Any]:
    return {
        "stream": {
            "url": "wss://stream.example.test/stream",
            "streams": ["ethinr@trade"],
            "reconnect_delay_seconds": 3,
        },
        "trigger": {"trigger_price": 2500.0},
        "logging": {"level": "DEBUG", "format_json": True},
        "delivery": {"stdout_format": "json"},
    }
