"""
WazirX WebSocket stream client.

Connects to the public stream endpoint, subscribes to trade streams and
forwards every frame to a StreamSession. websocket-client invokes the
callbacks one at a time from its run_forever loop.
"""

import threading
from typing import Optional

import orjson
import structlog
import websocket

from ..config.defaults import StreamParams
from ..session import StreamSession

logger = structlog.get_logger(__name__)


def build_subscribe_frame(streams: tuple[str, ...]) -> str:
    """Subscription request for the given stream names."""
    return orjson.dumps({"event": "subscribe", "streams": list(streams)}).decode()


class WazirXStreamClient:
    """
    Callback-driven WebSocket client feeding a StreamSession.

    Usage:
        client = WazirXStreamClient(session, StreamParams())
        client.start()
        ...
        client.close()
    """

    def __init__(self, session: StreamSession, params: Optional[StreamParams] = None):
        self.session = session
        self.params = params or StreamParams()
        self.logger = logger.bind(url=self.params.url)

        self.ws: Optional[websocket.WebSocketApp] = None
        self.ws_thread: Optional[threading.Thread] = None
        self.connected = threading.Event()

    def _create_app(self) -> websocket.WebSocketApp:
        return websocket.WebSocketApp(
            self.params.url,
            on_open=self._on_open,
            on_message=self._on_message,
            on_error=self._on_error,
            on_close=self._on_close,
        )

    def _on_open(self, ws: websocket.WebSocketApp) -> None:
        self.logger.info("Connected to WazirX WebSocket")
        self.connected.set()
        ws.send(build_subscribe_frame(self.params.streams))
        self.logger.info("Subscribed to streams", streams=list(self.params.streams))

    def _on_message(self, ws: websocket.WebSocketApp, message: str) -> None:
        self.session.on_message(message)

    def _on_error(self, ws: websocket.WebSocketApp, error: Exception) -> None:
        self.logger.error("WebSocket error", error=str(error))

    def _on_close(self, ws: websocket.WebSocketApp, close_status_code: Optional[int],
                  close_msg: Optional[str]) -> None:
        self.connected.clear()
        self.logger.info(
            "Connection closed",
            status_code=close_status_code,
            reason=close_msg
        )

    def run_forever(self) -> None:
        """Run the connection loop on the calling thread until closed."""
        if self.ws is None:
            self.ws = self._create_app()

        ping_interval = self.params.ping_interval_seconds
        ping_timeout = self.params.ping_timeout_seconds if ping_interval else None
        if ping_timeout is not None and ping_timeout >= ping_interval:
            ping_timeout = None

        self.ws.run_forever(
            ping_interval=ping_interval,
            ping_timeout=ping_timeout,
            reconnect=self.params.reconnect_delay_seconds,
        )

    def start(self, wait_seconds: Optional[float] = 10.0) -> bool:
        """
        Start the connection loop on a daemon thread.

        Args:
            wait_seconds: How long to wait for the connection to open; None skips waiting

        Returns:
            True if the connection opened within the wait, False otherwise
        """
        self.logger.info("Connecting to WazirX WebSocket")
        self.ws = self._create_app()
        self.ws_thread = threading.Thread(target=self.run_forever, name="wazirx-stream", daemon=True)
        self.ws_thread.start()

        if wait_seconds is None:
            return False
        return self.connected.wait(wait_seconds)

    def close(self) -> None:
        """Close the connection and stop the loop."""
        if self.ws is not None:
            self.ws.close()
        if self.ws_thread is not None:
            self.ws_thread.join(timeout=5)
        self.logger.info("Stream client stopped", stats=self.session.get_stats())
