"""Allow `python -m wwvb_decoder`."""

import sys

from .main import main

sys.exit(main())
