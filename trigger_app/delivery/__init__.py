"""
Order intent delivery module.

Sinks that receive intents from a streaming session: stdout, a JSON-lines
file, and a dispatcher that fans intents out to every enabled destination.
"""
