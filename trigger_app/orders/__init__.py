"""
Order intent module.

Builds the immutable buy/sell intents handed to delivery sinks. Nothing in
this module submits orders to a venue.
"""
