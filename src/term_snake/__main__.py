"""Allow ``python -m term_snake``."""

import sys

from term_snake.cli import main

sys.exit(main())
