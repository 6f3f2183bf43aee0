"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    AppConfig,
    DeliveryParams,
    LoggingParams,
    StreamParams,
    TriggerParams,
    get_default_config,
)
from .validation import ConfigValidator

CONFIG_FILENAME = "app.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: AppConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader; config_dir defaults to ./config under the working directory."""
        if config_dir is None:
            config_dir = Path.cwd() / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from the YAML config file, if present."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        try:
            with open(config_file) as f:
                file_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {config_file}: {e}",
                field=str(config_file)
            ) from e

        if file_config is None:
            return {}

        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Top level of {config_file} must be a mapping",
                field=str(config_file),
                value=file_config
            )

        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides, e.g. from the command line (highest priority)
        2. Config file overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_app_config(self, overrides: Optional[dict[str, Any]] = None) -> AppConfig:
        """
        Load, validate and build the typed application configuration.

        Raises:
            ConfigurationError: If any merged value fails validation
        """
        config = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            first = errors[0]
            details = "; ".join(f"{err.field}: {err.message} (got: {err.value!r})" for err in errors)
            raise ConfigurationError(
                f"Invalid configuration: {details}",
                field=first.field,
                value=first.value
            )

        try:
            stream = dict(config.get("stream", {}))
            stream["streams"] = tuple(stream.get("streams", ()))
            return AppConfig(
                stream=StreamParams(**stream),
                trigger=TriggerParams(**config.get("trigger", {})),
                logging=LoggingParams(**config.get("logging", {})),
                delivery=DeliveryParams(**config.get("delivery", {})),
            )
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key: {e}") from e

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
