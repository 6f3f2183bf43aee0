"""File-based intent delivery mechanism."""

import fcntl
from pathlib import Path

from ..config.intent_delivery import FileDeliveryConfig
from ..orders.models import OrderIntent
from .base import BaseIntentDelivery, DeliveryResult, DeliveryStatus

SUPPORTED_FORMATS = ("jsonl",)


class FileIntentDelivery(BaseIntentDelivery):
    """Appends intents to a JSON-lines file, one intent per line."""

    def __init__(self, name: str, config: FileDeliveryConfig):
        if config.format not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported file format: {config.format}")

        super().__init__(name, config)
        self.config: FileDeliveryConfig = config
        self.output_path = Path(config.output_path)

        if config.create_dirs:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

    def deliver(self, intent: OrderIntent) -> DeliveryResult:
        try:
            # Several sessions may share one intents file
            with open(self.output_path, "a") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                f.write(intent.to_json() + "\n")
        except OSError as e:
            self.logger.warning(
                "Intent delivery file error",
                output_path=str(self.output_path),
                error=str(e)
            )
            return DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"File system error: {e}",
                error=e
            )

        self.logger.info(
            "Intent written to file",
            side=intent.side.value,
            output_path=str(self.output_path)
        )
        return DeliveryResult(status=DeliveryStatus.SUCCESS, message=f"Written to {self.output_path}")

    def health_check(self) -> bool:
        """Check if the output directory is writable."""
        try:
            test_file = self.output_path.parent / ".health_check_test"
            test_file.write_text("test")
            test_file.unlink()
            return True

        except OSError as e:
            self.logger.warning("Health check failed", error=str(e))
            return False
