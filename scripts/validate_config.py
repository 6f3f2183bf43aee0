#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from trigger_app.config.loader import ConfigLoader
from trigger_app.config.validation import ConfigValidator
from trigger_app.errors import ConfigurationError


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating configuration in {loader.config_dir}...")

    try:
        merged = loader.merge_config()
    except ConfigurationError as e:
        print(f"❌ Cannot read configuration: {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_config(merged)
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value!r})")
        sys.exit(1)

    try:
        config = loader.load_app_config()
    except ConfigurationError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print(f"✅ Stream: {config.stream.url} {list(config.stream.streams)}")
    if config.trigger.trigger_price is None:
        print("ℹ️  No trigger price configured; it will be prompted for at startup")
    else:
        print(f"✅ Trigger price: {config.trigger.trigger_price}")

    print(f"\n🎉 Configuration validation passed!")
    sys.exit(0)


if __name__ == "__main__":
    main()
