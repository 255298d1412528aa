"""Allow ``python -m gomin PATH``."""

import sys

from gomin.cli import main

sys.exit(main())
