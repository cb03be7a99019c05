#!/usr/bin/env python3
# ================================================================================
# Harness Entry Point
# ================================================================================
#
#   python run_harness.py [--variant complete] [--help]
#
# ================================================================================

import sys

from uiharness.cli import main

if __name__ == "__main__":
    sys.exit(main())
