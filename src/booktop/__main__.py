"""Entry point for ``python -m booktop``."""

import sys

from booktop.app import main

sys.exit(main())
