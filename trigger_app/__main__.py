"""Allow running the app with ``python -m trigger_app``."""

import sys

from .cli import main

sys.exit(main())
