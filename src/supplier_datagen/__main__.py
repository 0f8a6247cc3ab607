"""Allow ``python -m supplier_datagen``."""

import sys

from supplier_datagen.cli import main

if __name__ == "__main__":
    sys.exit(main())
