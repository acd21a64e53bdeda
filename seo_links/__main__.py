# Allows the package to be run as a script using `python -m seo_links`

from __future__ import annotations

import sys

from seo_links.cli import main

if __name__ == "__main__":
    sys.exit(main())
