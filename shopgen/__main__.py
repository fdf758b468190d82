"""Allow ``python -m shopgen``."""

import sys

from shopgen.cli import main

sys.exit(main())
