"""Order intent value object and its serialized forms."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import orjson

from ..data.models import Side


@dataclass(frozen=True)
class OrderIntent:
    """
    Decided action and price produced when a trigger fires.

    The price is already quantized to two decimals, so every serialized
    form shows the same value.
    """
    side: Side
    price: Decimal

    @property
    def price_text(self) -> str:
        """Price with exactly two decimals, e.g. '100.00'."""
        return str(self.price)

    def to_payload(self) -> dict[str, Any]:
        """Intent as a plain dictionary."""
        return {"type": self.side.value, "price": float(self.price)}

    def to_json(self) -> str:
        """Intent as compact JSON text, keeping both price decimals."""
        return orjson.dumps({
            "type": self.side.value,
            "price": orjson.Fragment(self.price_text),
        }).decode()

    def __str__(self) -> str:
        return f"{self.side.value.upper()}@{self.price_text}"
