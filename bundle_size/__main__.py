"""Allow running the package with ``python -m bundle_size``."""
import sys

from bundle_size.cli import main

if __name__ == "__main__":
    sys.exit(main())
