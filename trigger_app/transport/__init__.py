"""
Market data transport module.

WebSocket connection handling for the trade stream. The connection feeds
frames into a StreamSession and owns nothing of the trigger logic.
"""
