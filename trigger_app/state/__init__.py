"""
Trigger state machine module.

Holds the trigger threshold and per-side fired flags for one session and
decides when a buy or sell intent should be emitted.
"""
