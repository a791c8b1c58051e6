"""Allow ``python -m timeline_analyzer``."""

import sys

from timeline_analyzer.cli.main import main

sys.exit(main())
