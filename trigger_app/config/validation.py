"""Configuration validation utilities."""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def is_positive_price(value: Any) -> bool:
    """Check that a value is a finite, positive number (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_trigger_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate trigger parameters. An unset trigger price is allowed."""
        errors = []

        if params.get("trigger_price") is not None:
            value = params["trigger_price"]
            if not is_positive_price(value):
                errors.append(ValidationError(
                    field="trigger_price",
                    message="Must be a finite positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_stream_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate stream parameters."""
        errors = []

        if "url" in params:
            value = params["url"]
            if not isinstance(value, str) or not value.startswith(("ws://", "wss://")):
                errors.append(ValidationError(
                    field="url",
                    message="Must be a ws:// or wss:// URL",
                    value=value
                ))

        if "streams" in params:
            value = params["streams"]
            if (not isinstance(value, (list, tuple)) or not value
                    or not all(isinstance(s, str) and s for s in value)):
                errors.append(ValidationError(
                    field="streams",
                    message="Must be a non-empty list of stream names",
                    value=value
                ))

        for name in ("reconnect_delay_seconds", "ping_interval_seconds", "ping_timeout_seconds"):
            if name in params:
                value = params[name]
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in (
                    "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
                errors.append(ValidationError(
                    field="level",
                    message="Must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL",
                    value=value
                ))

        for name in ("format_json", "include_caller"):
            if name in params and not isinstance(params[name], bool):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a boolean",
                    value=params[name]
                ))

        return errors

    @staticmethod
    def validate_delivery_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate intent delivery parameters."""
        errors = []

        if "stdout_format" in params:
            value = params["stdout_format"]
            if value not in ("pretty", "json"):
                errors.append(ValidationError(
                    field="stdout_format",
                    message="Must be 'pretty' or 'json'",
                    value=value
                ))

        if params.get("output_path") is not None:
            value = params["output_path"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="output_path",
                    message="Must be a non-empty path",
                    value=value
                ))

        if "retry_attempts" in params:
            value = params["retry_attempts"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                errors.append(ValidationError(
                    field="retry_attempts",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "retry_delay_seconds" in params:
            value = params["retry_delay_seconds"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                errors.append(ValidationError(
                    field="retry_delay_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "trigger" in config:
            errors.extend(ConfigValidator.validate_trigger_params(config["trigger"]))

        if "stream" in config:
            errors.extend(ConfigValidator.validate_stream_params(config["stream"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        if "delivery" in config:
            errors.extend(ConfigValidator.validate_delivery_params(config["delivery"]))

        return errors
