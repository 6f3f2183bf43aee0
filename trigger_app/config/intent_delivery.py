"""Configuration for order intent delivery mechanisms."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .defaults import DeliveryParams


class DeliveryMethod(Enum):
    """Supported intent delivery methods."""
    FILE_OUTPUT = "file_output"
    STDOUT = "stdout"


@dataclass(frozen=True)
class FileDeliveryConfig:
    """Configuration for file-based delivery."""
    output_path: str
    format: str = "jsonl"  # jsonl only; one intent per line
    create_dirs: bool = True


@dataclass(frozen=True)
class StdoutDeliveryConfig:
    """Configuration for stdout delivery."""
    format: str = "pretty"  # json, pretty
    include_timestamp: bool = False


@dataclass(frozen=True)
class DeliveryDestination:
    """Single intent delivery destination."""
    name: str
    method: DeliveryMethod
    config: Any  # FileDeliveryConfig | StdoutDeliveryConfig
    enabled: bool = True


@dataclass(frozen=True)
class IntentDeliveryConfig:
    """Complete intent delivery configuration."""
    destinations: list[DeliveryDestination]
    enabled: bool = True

    # Error handling
    failure_retry_attempts: int = 0
    failure_retry_delay_seconds: float = 1.0


def get_default_delivery_config() -> IntentDeliveryConfig:
    """Get default intent delivery configuration."""
    return IntentDeliveryConfig(
        destinations=[
            DeliveryDestination(
                name="stdout",
                method=DeliveryMethod.STDOUT,
                config=StdoutDeliveryConfig(format="pretty"),
                enabled=True
            )
        ],
        enabled=True,
        failure_retry_attempts=0,
        failure_retry_delay_seconds=1.0,
    )


def create_file_destination(
    name: str,
    output_path: str,
    enabled: bool = True,
    **kwargs
) -> DeliveryDestination:
    """Create file delivery destination."""
    return DeliveryDestination(
        name=name,
        method=DeliveryMethod.FILE_OUTPUT,
        config=FileDeliveryConfig(
            output_path=output_path,
            **kwargs
        ),
        enabled=enabled
    )


def delivery_config_from_params(params: DeliveryParams) -> IntentDeliveryConfig:
    """Build the delivery configuration from application parameters."""
    destinations = [
        DeliveryDestination(
            name="stdout",
            method=DeliveryMethod.STDOUT,
            config=StdoutDeliveryConfig(format=params.stdout_format),
        )
    ]

    if params.output_path:
        destinations.append(create_file_destination("file", params.output_path))

    return IntentDeliveryConfig(
        destinations=destinations,
        failure_retry_attempts=params.retry_attempts,
        failure_retry_delay_seconds=params.retry_delay_seconds,
    )
