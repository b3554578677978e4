"""Allow ``python -m sealkit``."""

import sys

from sealkit.cli import main

sys.exit(main())
