"""Default configuration parameters for the price trigger app."""

from dataclasses import dataclass, field
from typing import Optional


DEFAULT_STREAM_URL = "wss://stream.wazirx.com/stream"
DEFAULT_STREAMS = ("btcinr@trade",)


@dataclass(frozen=True)
class StreamParams:
    """Market data stream parameters."""
    url: str = DEFAULT_STREAM_URL
    streams: tuple[str, ...] = DEFAULT_STREAMS
    reconnect_delay_seconds: int = 5                # 0 disables reconnects
    ping_interval_seconds: int = 30
    ping_timeout_seconds: int = 10


@dataclass(frozen=True)
class TriggerParams:
    """Trigger threshold parameters."""
    trigger_price: Optional[float] = None           # Prompted for when unset


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False
    include_caller: bool = False


@dataclass(frozen=True)
class DeliveryParams:
    """Order intent sink parameters."""
    stdout_format: str = "pretty"                   # pretty, json
    output_path: Optional[str] = None               # Optional jsonl file sink
    retry_attempts: int = 0                         # Extra attempts per failed write
    retry_delay_seconds: float = 1.0


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    stream: StreamParams = field(default_factory=StreamParams)
    trigger: TriggerParams = field(default_factory=TriggerParams)
    logging: LoggingParams = field(default_factory=LoggingParams)
    delivery: DeliveryParams = field(default_factory=DeliveryParams)


def get_default_config() -> AppConfig:
    """Get the default configuration instance."""
    return AppConfig(
        stream=StreamParams(),
        trigger=TriggerParams(),
        logging=LoggingParams(),
        delivery=DeliveryParams(),
    )
