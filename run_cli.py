#!/usr/bin/env python3
"""Run the imgico command line converter"""

import sys

from imgico.cli import main

if __name__ == "__main__":
    sys.exit(main())
