#!/usr/bin/env python3
"""Convenience wrapper.

Run:
  python scan_tfbs.py --help

This simply calls `tfbsscan.cli.main` (also installed as the `tfbsscan` command).
"""

import sys

from tfbsscan.cli import main

if __name__ == "__main__":
    sys.exit(main())
