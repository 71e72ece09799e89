"""Allow ``python -m article_locator``."""

import sys

from .runner import main

sys.exit(main())
