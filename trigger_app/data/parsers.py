"""
Trade stream parsers for converting raw frames to price samples.

This module handles parsing of streamed JSON frames of the form

    {"stream": "btcinr@trade", "data": {"s": "btcinr", "price": "2543210.0", ...}}

into PriceSample objects, with error classification for frames that carry no
price or are not JSON at all.
"""

import math
import threading
import time
from typing import Any, Optional, Union

import orjson

from ..errors import MalformedDataError, MissingDataError
from .models import PriceSample


class ParseError(Exception):
    """Raised when a frame cannot be turned into a price sample."""
    pass


class MissingPriceError(ParseError, MissingDataError):
    """Raised when a well-formed frame has no string data.price field."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, data_type="price", **kwargs)


class MalformedMessageError(ParseError, MalformedDataError):
    """Raised when a frame is not valid JSON or its price string is not a number."""

    def __init__(self, message: str, raw_data: Optional[str] = None, **kwargs):
        super().__init__(message, raw_data=raw_data, expected_format="json", **kwargs)


class ParsingMetrics:
    """Thread-safe counters for parsing operations."""

    def __init__(self):
        self.total_parses = 0
        self.successful_parses = 0
        self.missing_price = 0
        self.malformed = 0
        self.last_failure_time = None
        self._lock = threading.Lock()

    def record_parse_success(self):
        """Record successful parsing."""
        with self._lock:
            self.total_parses += 1
            self.successful_parses += 1

    def record_parse_failure(self, error: ParseError):
        """Record parsing failure."""
        with self._lock:
            self.total_parses += 1
            self.last_failure_time = time.time()

            if isinstance(error, MissingPriceError):
                self.missing_price += 1
            else:
                self.malformed += 1

    def get_stats(self) -> dict[str, Any]:
        """Get current metrics."""
        with self._lock:
            return {
                "total_parses": self.total_parses,
                "successful_parses": self.successful_parses,
                "missing_price": self.missing_price,
                "malformed": self.malformed,
                "success_rate": self.successful_parses / max(self.total_parses, 1),
                "last_failure_time": self.last_failure_time,
            }


def parse_json_payload(raw_data: Union[str, bytes]) -> Any:
    """
    Parse a raw JSON frame.

    Args:
        raw_data: Raw JSON text or UTF-8 bytes from the stream

    Returns:
        Decoded JSON value (not necessarily a dictionary)

    Raises:
        MalformedMessageError: If the frame is not valid JSON
    """
    try:
        return orjson.loads(raw_data)
    except (orjson.JSONDecodeError, TypeError) as e:
        raise MalformedMessageError(f"Invalid JSON: {e}", raw_data=_preview(raw_data))


def parse_price_value(value: Any) -> float:
    """
    Convert a data.price value to a float.

    Only numeric strings carry a price. Zero and negative values parse like
    any other number; the trigger engine decides what they mean.

    Raises:
        MissingPriceError: If the value is not a string (number, null, object)
        MalformedMessageError: If the string is not a finite number
    """
    if not isinstance(value, str):
        raise MissingPriceError(f"Price is not a numeric string, got {type(value).__name__}")

    if "_" in value:
        raise MalformedMessageError(f"Invalid price string '{value}'")

    try:
        price = float(value)
    except ValueError as e:
        raise MalformedMessageError(f"Invalid price string '{value}': {e}")

    if not math.isfinite(price):
        raise MalformedMessageError(f"Price must be finite, got {price}")

    return price


def _preview(raw_data: Any, limit: int = 200) -> str:
    """Shorten a raw frame for error context."""
    if isinstance(raw_data, bytes):
        raw_data = raw_data.decode("utf-8", errors="replace")
    text = str(raw_data)
    return text if len(text) <= limit else text[:limit] + "..."


class MessageParser:
    """
    Extracts prices from raw trade stream frames.

    Parsing is pure apart from the per-instance counters kept for diagnostics.
    """

    def __init__(self):
        self.metrics = ParsingMetrics()

    def parse(self, raw: Union[str, bytes]) -> PriceSample:
        """
        Parse one frame into a PriceSample.

        Args:
            raw: Raw frame text (or UTF-8 bytes)

        Returns:
            PriceSample carrying the parsed data.price

        Raises:
            MissingPriceError: If the frame has no data object or no string price field
            MalformedMessageError: If the frame is not JSON or the price string is not numeric
        """
        try:
            sample = self._parse(raw)
        except ParseError as e:
            self.metrics.record_parse_failure(e)
            raise

        self.metrics.record_parse_success()
        return sample

    def _parse(self, raw: Union[str, bytes]) -> PriceSample:
        payload = parse_json_payload(raw)

        if not isinstance(payload, dict):
            raise MissingPriceError(
                "Frame is not a JSON object",
                context={"frame": _preview(raw)}
            )

        data = payload.get("data")
        if not isinstance(data, dict) or "price" not in data:
            raise MissingPriceError(
                "No price field found in the message",
                context={"frame": _preview(raw)}
            )

        try:
            price = parse_price_value(data["price"])
        except MissingPriceError as e:
            e.context["frame"] = _preview(raw)
            raise
        except MalformedMessageError as e:
            e.raw_data = _preview(raw)
            raise

        stream = payload.get("stream")
        symbol = data.get("s")

        return PriceSample(
            price=price,
            stream=stream if isinstance(stream, str) else None,
            symbol=symbol if isinstance(symbol, str) else None,
        )

    def get_stats(self) -> dict[str, Any]:
        """Get parsing statistics."""
        return self.metrics.get_stats()

    def reset_stats(self):
        """Reset parsing statistics."""
        self.metrics = ParsingMetrics()
