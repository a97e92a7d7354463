#!/usr/bin/env python3
"""
gitwrap CLI entry point.
Allows running with `python -m gitwrap`
"""

from .cli.main import main

if __name__ == "__main__":
    main()
