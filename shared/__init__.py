"""
coffdump Shared Module
=======================

Configuration, logging and console infrastructure used by the coffdump
command line tool.
"""

from shared.config import CoffdumpConfig

__all__ = ["CoffdumpConfig"]
