"""backuper: backuper/__main__.py.

Entry point for ``python -m backuper``.
"""

import sys

from .cli.dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
