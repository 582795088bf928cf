"""
coffdump Module Entry Point
============================

Allows running the CLI via: python -m coffdump
"""

from coffdump.cli import main

if __name__ == "__main__":
    main()
