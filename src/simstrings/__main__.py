"""Allow ``python -m simstrings``."""

import sys

from simstrings.cli import main

sys.exit(main())
