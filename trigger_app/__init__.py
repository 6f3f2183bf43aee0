"""
Price Trigger App - One-shot price trigger for streamed market data

Consumes a live trade stream, extracts prices and emits at most one buy and
one sell order intent when the price crosses a user-defined trigger level.
"""

__version__ = "0.1.0"
__author__ = "Price Trigger Team"
