"""Run the console driver: ``python -m tellersim``."""

import sys

from tellersim.console import main

sys.exit(main())
