#!/usr/bin/env python3
"""FitQuest — entry point.

Run with:
    python main.py status <user>
    python -m fitquest status <user>
"""

import sys

from fitquest.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
