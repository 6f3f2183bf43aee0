"""
Canonical data models for parsed market data.

This module defines immutable data structures that represent clean, validated
market data after parsing raw stream frames.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Side(str, Enum):
    """Order side."""
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class PriceSample:
    """Single price observation extracted from one frame."""
    price: float                    # Parsed from data.price
    stream: Optional[str] = None    # e.g. "btcinr@trade"
    symbol: Optional[str] = None    # data.s, e.g. "btcinr"
