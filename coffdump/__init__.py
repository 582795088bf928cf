"""
coffdump -- COFF Object File Inspector
=======================================

Read-only decoder and pretty-printer for the structural metadata of
big-endian COFF object files: the file header, the section header table,
per-section relocation tables and the symbol table.

Capabilities:
    - Fixed-width, big-endian record decoding with truncation detection
    - Offset-driven location of relocation and symbol tables
    - Inline vs. string-table symbol name classification
    - Text, Rich table and JSON output

References:
    - AT&T. (1989). UNIX System V Release 4 Programmer's Guide,
      "Common Object File Format".
"""

__version__ = "1.0.0"

from coffdump.core.engine import CoffEngine
from coffdump.core.models import CoffImage
from coffdump.output.console import CoffConsoleOutput
from coffdump.output.report import CoffReportGenerator

__all__ = [
    "CoffEngine",
    "CoffImage",
    "CoffConsoleOutput",
    "CoffReportGenerator",
]

