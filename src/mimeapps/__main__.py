#!/usr/bin/env python3
"""
mimeapps - Main Entry Point
"""
import sys

from mimeapps.cli import main

if __name__ == "__main__":
    sys.exit(main())
