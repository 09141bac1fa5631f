"""Allow ``python -m rawql``."""
import sys

from rawql.cli import main

sys.exit(main())
