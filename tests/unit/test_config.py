"""Unit tests for configuration management."""

import pytest
from pathlib import Path

import yaml

from trigger_app.config.defaults import (
    DEFAULT_STREAM_URL,
    AppConfig,
    DeliveryParams,
    get_default_config,
)
from trigger_app.config.intent_delivery import (
    DeliveryMethod,
    delivery_config_from_params,
    get_default_delivery_config,
)
from trigger_app.config.loader import ConfigLoader
from trigger_app.config.validation import ConfigValidator, is_positive_price
from trigger_app.errors import ConfigurationError

REPO_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


def write_config(config_dir: Path, content) -> None:
    config_dir.mkdir(parents=True, exist_ok=True)
    text = content if isinstance(content, str) else yaml.safe_dump(content)
    (config_dir / "app.yaml").write_text(text)


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        config = get_default_config()

        assert config.stream.url == DEFAULT_STREAM_URL
        assert config.stream.streams == ("btcinr@trade",)
        assert config.trigger.trigger_price is None
        assert config.logging.level == "INFO"
        assert config.delivery.stdout_format == "pretty"

    def test_default_delivery_config(self) -> None:
        config = get_default_delivery_config()

        assert len(config.destinations) == 1
        assert config.destinations[0].method == DeliveryMethod.STDOUT

    def test_delivery_config_from_params_adds_file(self) -> None:
        config = delivery_config_from_params(
            DeliveryParams(output_path="/tmp/intents.jsonl", retry_attempts=2, retry_delay_seconds=0.5)
        )

        assert [d.method for d in config.destinations] == [
            DeliveryMethod.STDOUT, DeliveryMethod.FILE_OUTPUT
        ]
        assert config.failure_retry_attempts == 2
        assert config.failure_retry_delay_seconds == 0.5


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        loader = ConfigLoader.create()

        assert isinstance(loader.config_dir, Path)

    def test_default_config_dir_follows_working_directory(self, tmp_path, monkeypatch) -> None:
        write_config(tmp_path / "config", {"trigger": {"trigger_price": 123.0}})
        monkeypatch.chdir(tmp_path)

        loader = ConfigLoader.create()

        assert loader.config_dir.resolve() == (tmp_path / "config").resolve()
        assert loader.load_app_config().trigger.trigger_price == 123.0

    def test_merge_config_defaults_only(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path)

        config = loader.merge_config()

        assert config["stream"]["url"] == DEFAULT_STREAM_URL
        assert config["trigger"]["trigger_price"] is None

    def test_file_overrides_defaults(self, tmp_path, sample_app_config) -> None:
        write_config(tmp_path, sample_app_config)

        config = ConfigLoader.create(tmp_path).merge_config()

        assert config["stream"]["url"] == "wss://stream.example.test/stream"
        assert config["stream"]["reconnect_delay_seconds"] == 3
        # Untouched defaults remain
        assert config["stream"]["ping_interval_seconds"] == 30

    def test_overrides_beat_file(self, tmp_path, sample_app_config) -> None:
        write_config(tmp_path, sample_app_config)

        config = ConfigLoader.create(tmp_path).merge_config(
            {"trigger": {"trigger_price": 3000.0}}
        )

        assert config["trigger"]["trigger_price"] == 3000.0
        assert config["stream"]["streams"] == ["ethinr@trade"]

    def test_load_app_config(self, tmp_path, sample_app_config) -> None:
        write_config(tmp_path, sample_app_config)

        config = ConfigLoader.create(tmp_path).load_app_config()

        assert isinstance(config, AppConfig)
        assert config.stream.streams == ("ethinr@trade",)
        assert config.trigger.trigger_price == 2500.0
        assert config.logging.format_json is True
        assert config.delivery.stdout_format == "json"

    def test_empty_file_uses_defaults(self, tmp_path) -> None:
        write_config(tmp_path, "")

        assert ConfigLoader.create(tmp_path).load_app_config() == get_default_config()

    def test_repository_config_file_is_valid(self) -> None:
        config = ConfigLoader.create(REPO_CONFIG_DIR).load_app_config()

        assert config.stream.url == DEFAULT_STREAM_URL
        assert config.delivery == DeliveryParams()

    def test_invalid_yaml(self, tmp_path) -> None:
        write_config(tmp_path, "stream: [unclosed")

        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).merge_config()

    def test_non_mapping_file(self, tmp_path) -> None:
        write_config(tmp_path, "- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).merge_config()

    def test_invalid_trigger_price(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load_app_config({"trigger": {"trigger_price": -10}})

        assert exc_info.value.field == "trigger_price"
        assert exc_info.value.value == -10

    def test_unknown_key(self, tmp_path) -> None:
        write_config(tmp_path, {"stream": {"colour": "blue"}})

        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).load_app_config()


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_config(self, sample_app_config) -> None:
        assert ConfigValidator.validate_config(sample_app_config) == []

    def test_unset_trigger_price_is_valid(self) -> None:
        assert ConfigValidator.validate_trigger_params({"trigger_price": None}) == []

    @pytest.mark.parametrize("value", [0, -1, float("nan"), float("inf"), "100", True])
    def test_invalid_trigger_price(self, value) -> None:
        errors = ConfigValidator.validate_trigger_params({"trigger_price": value})

        assert len(errors) == 1
        assert errors[0].field == "trigger_price"

    def test_invalid_stream_params(self) -> None:
        errors = ConfigValidator.validate_stream_params({
            "url": "https://stream.wazirx.com",
            "streams": [],
            "reconnect_delay_seconds": -1,
        })

        assert {e.field for e in errors} == {"url", "streams", "reconnect_delay_seconds"}

    def test_invalid_logging_params(self) -> None:
        errors = ConfigValidator.validate_logging_params({"level": "LOUD", "format_json": "yes"})

        assert {e.field for e in errors} == {"level", "format_json"}

    def test_invalid_delivery_params(self) -> None:
        errors = ConfigValidator.validate_delivery_params({
            "stdout_format": "xml",
            "output_path": "",
            "retry_attempts": -2,
            "retry_delay_seconds": "soon",
        })

        assert {e.field for e in errors} == {
            "stdout_format", "output_path", "retry_attempts", "retry_delay_seconds"
        }

    def test_is_positive_price(self) -> None:
        assert is_positive_price(0.01)
        assert is_positive_price(5)
        assert not is_positive_price(False)
        assert not is_positive_price(None)
