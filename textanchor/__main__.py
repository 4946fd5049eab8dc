"""Allow `python -m textanchor`."""

import sys

from .cli import main

sys.exit(main())
