"""Allow ``python -m sfwp``."""

import sys

from sfwp.cli import main

sys.exit(main())
