"""Allow ``python -m studiofs``."""

import sys

from studiofs.main import main

sys.exit(main())
