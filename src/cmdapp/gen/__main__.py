"""Allow running the generator with ``python -m cmdapp.gen``."""

import sys

from cmdapp.gen.cli import main

sys.exit(main())
