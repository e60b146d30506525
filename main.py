#!/usr/bin/env python3
"""Browser Switcher terminal entry point

Usage:
    python main.py                          # interactive command loop
    python main.py https://example.com      # open with the matching browser
    python main.py --data-file ./rules.json # alternate rules file

Same as the installed `browser-switcher` command.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from switcher.cli import main


if __name__ == "__main__":
    sys.exit(main())
