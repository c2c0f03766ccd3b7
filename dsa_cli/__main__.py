#!/usr/bin/env python3
"""
dsa-cli - Main Entry Point

Run with: python -m dsa_cli [OPTIONS] COMMAND [ARGS]
"""

from .cli import main

if __name__ == "__main__":
    main()
