"""
Data ingestion module.

Parses raw stream frames into canonical price samples.
"""
