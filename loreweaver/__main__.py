"""Allow `python -m loreweaver`."""

import sys

from loreweaver.cli import main

sys.exit(main())
