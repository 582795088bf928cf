"""
coffdump Console Output
========================

Renders a decoded :class:`~coffdump.core.models.CoffImage` for the terminal.

Two styles are available:

- ``text``  -- the classic dump: four labelled groups (``[Header]``,
  ``[Sections]``, ``[Relocation information]``, ``[Symbol Table]``), one
  line group per record.
- ``table`` -- the same four groups as Rich tables.

The ``format_*`` functions build plain text lines and have no terminal
dependency, so the layout can be checked directly.
"""

from __future__ import annotations

from shared.config import DumpConfig
from shared.console import CoffConsole

from coffdump.core import constants
from coffdump.core.errors import NameEncodingError
from coffdump.core.models import (
    CoffImage,
    FileHeader,
    LiteralName,
    Relocation,
    SectionHeader,
    Symbol,
    SymbolName,
    TableOffsetName,
)

HEADER_LABEL = "[Header]"
SECTIONS_LABEL = "[Sections]"
RELOCATIONS_LABEL = "[Relocation information]"
SYMBOLS_LABEL = "[Symbol Table]"

STYLES: tuple[str, ...] = ("text", "table")


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------

def _addr(value: int, settings: DumpConfig) -> str:
    return f"0x{value:0{settings.address_width}x}"


def _tag(name: str | None, settings: DumpConfig) -> str:
    if not settings.annotate or not name:
        return ""
    return f" ({name})"


def _flags_tag(names: list[str], settings: DumpConfig) -> str:
    return _tag("|".join(names), settings)


def raw_name(name: SymbolName) -> str:
    """Render the 8 raw name bytes as ``[0x2e 0x74 ...]``."""
    return "[" + " ".join(f"0x{b:02x}" for b in name.raw) + "]"


def name_text(name: SymbolName) -> str:
    """Human-readable form of a name field.

    String-table references render as ``strtab[0x000020]``.  Literal names
    that are not valid text fall back to an escaped byte rendering instead
    of failing.
    """
    if isinstance(name, TableOffsetName):
        return f"strtab[0x{name.offset:06x}]"
    try:
        return name.text
    except NameEncodingError:
        text, _, _ = name.raw.partition(b"\x00")
        return text.decode("utf-8", errors="backslashreplace")


def _name_field(name: LiteralName | TableOffsetName, settings: DumpConfig) -> str:
    if settings.show_raw_names:
        return f"{raw_name(name)} {name_text(name)}"
    return name_text(name)


# ---------------------------------------------------------------------------
# Text formatting
# ---------------------------------------------------------------------------

def format_header(header: FileHeader, settings: DumpConfig) -> list[str]:
    return [
        f"  magic : 0x{header.magic:04x}"
        f"{_tag(constants.magic_name(header.magic), settings)}",
        f"  nscns : {header.num_sections}",
        f"  timdat : 0x{header.timestamp:08x}",
        f"  symoff : {_addr(header.symbol_table_offset, settings)}"
        f"  nsyms : {header.num_symbols}",
        f"  opthdr : {header.optional_header_size}",
        f"  flags : 0x{header.flags:04x}"
        f"{_flags_tag(constants.file_flag_names(header.flags), settings)}",
    ]


def format_section(
    number: int, section: SectionHeader, settings: DumpConfig,
) -> list[str]:
    return [
        f"scnum {number}",
        f"  name : {_name_field(section.name, settings)}",
        f"  paddr : {_addr(section.physical_addr, settings)}"
        f"  vaddr : {_addr(section.virtual_addr, settings)}"
        f"  size : {section.size}",
        f"  scnoff : {_addr(section.data_offset, settings)}"
        f"  reloff : {_addr(section.relocation_offset, settings)}"
        f"  lnnoff : {_addr(section.line_number_offset, settings)}",
        f"  nreloc : {section.num_relocations}"
        f"  nlnno : {section.num_line_numbers}"
        f"  flags : 0x{section.flags:08x}"
        f"{_flags_tag(constants.section_flag_names(section.flags), settings)}",
    ]


def format_relocation(
    number: int, reloc: Relocation, settings: DumpConfig,
) -> str:
    return (
        f"  scnum : {number}"
        f"  vaddr : {_addr(reloc.virtual_addr, settings)}"
        f"  symndx : {reloc.symbol_index:2}"
        f"  offset : {_addr(reloc.offset, settings)}"
        f"  type : 0x{reloc.type:04x}"
        f"  extra : 0x{reloc.extra:04x}"
    )


def format_symbol(index: int, sym: Symbol, settings: DumpConfig) -> list[str]:
    return [
        f"  [{index}] name : {_name_field(sym.name, settings)}",
        f"      value : 0x{sym.value:08x}"
        f"  scnum : {sym.section_number:2}"
        f"{_tag(constants.section_number_name(sym.section_number), settings)}"
        f"  type : 0x{sym.type:04x}"
        f"  class : 0x{sym.storage_class:02x}"
        f"{_tag(constants.storage_class_name(sym.storage_class), settings)}"
        f"  numaux : {sym.num_aux_entries}",
    ]


def format_image(image: CoffImage, settings: DumpConfig | None = None) -> list[str]:
    """Build the full text dump of *image*."""
    settings = settings or DumpConfig()
    out: list[str] = [HEADER_LABEL]
    out.extend(format_header(image.header, settings))

    out.extend(["", SECTIONS_LABEL])
    for number, section in image.iter_sections():
        out.extend(format_section(number, section, settings))

    out.extend(["", RELOCATIONS_LABEL])
    for number, reloc in image.iter_relocations():
        out.append(format_relocation(number, reloc, settings))

    out.extend(["", SYMBOLS_LABEL])
    for index, sym in enumerate(image.symbols):
        out.extend(format_symbol(index, sym, settings))
    return out


# ---------------------------------------------------------------------------
# CoffConsoleOutput
# ---------------------------------------------------------------------------

class CoffConsoleOutput:
    """Terminal renderer for decoded COFF images.

    Usage::

        output = CoffConsoleOutput()
        output.display(image, style="table")
    """

    def __init__(
        self,
        console: CoffConsole | None = None,
        settings: DumpConfig | None = None,
    ) -> None:
        self._console: CoffConsole = console or CoffConsole()
        self._settings: DumpConfig = settings or DumpConfig()

    def display(self, image: CoffImage, style: str = "text") -> None:
        """Render *image* in the given *style* (``text`` or ``table``)."""
        if style == "text":
            self._console.lines(format_image(image, self._settings))
        elif style == "table":
            self.display_header(image.header)
            self.display_sections(image)
            self.display_relocations(image)
            self.display_symbols(image)
        else:
            raise ValueError(f"Unknown display style {style!r}")

    # ------------------------------------------------------------------ #
    #  Table style
    # ------------------------------------------------------------------ #

    def display_header(self, header: FileHeader) -> None:
        s = self._settings
        rows = [
            ("magic", f"0x{header.magic:04x}{_tag(constants.magic_name(header.magic), s)}"),
            ("nscns", header.num_sections),
            ("timdat", f"0x{header.timestamp:08x}"),
            ("symoff", _addr(header.symbol_table_offset, s)),
            ("nsyms", header.num_symbols),
            ("opthdr", header.optional_header_size),
            ("flags", f"0x{header.flags:04x}"
                      f"{_flags_tag(constants.file_flag_names(header.flags), s)}"),
        ]
        self._console.table(HEADER_LABEL, ["Field", "Value"], rows)

    def display_sections(self, image: CoffImage) -> None:
        s = self._settings
        rows = [
            (
                number,
                _name_field(sec.name, s),
                _addr(sec.physical_addr, s),
                _addr(sec.virtual_addr, s),
                sec.size,
                _addr(sec.data_offset, s),
                _addr(sec.relocation_offset, s),
                _addr(sec.line_number_offset, s),
                sec.num_relocations,
                sec.num_line_numbers,
                f"0x{sec.flags:08x}"
                f"{_flags_tag(constants.section_flag_names(sec.flags), s)}",
            )
            for number, sec in image.iter_sections()
        ]
        self._console.table(
            SECTIONS_LABEL,
            ["#", "Name", "paddr", "vaddr", "size", "scnoff", "reloff",
             "lnnoff", "nreloc", "nlnno", "flags"],
            rows,
            justify=["right", "left", "right", "right", "right", "right",
                     "right", "right", "right", "right", "left"],
        )

    def display_relocations(self, image: CoffImage) -> None:
        s = self._settings
        rows = [
            (
                number,
                _addr(reloc.virtual_addr, s),
                reloc.symbol_index,
                _addr(reloc.offset, s),
                f"0x{reloc.type:04x}",
                f"0x{reloc.extra:04x}",
            )
            for number, reloc in image.iter_relocations()
        ]
        self._console.table(
            RELOCATIONS_LABEL,
            ["scnum", "vaddr", "symndx", "offset", "type", "extra"],
            rows,
            caption=f"{image.relocation_count} relocations",
            justify=["right"] * 6,
        )

    def display_symbols(self, image: CoffImage) -> None:
        s = self._settings
        rows = [
            (
                index,
                _name_field(sym.name, s),
                f"0x{sym.value:08x}",
                f"{sym.section_number}"
                f"{_tag(constants.section_number_name(sym.section_number), s)}",
                f"0x{sym.type:04x}",
                f"0x{sym.storage_class:02x}"
                f"{_tag(constants.storage_class_name(sym.storage_class), s)}",
                sym.num_aux_entries,
            )
            for index, sym in enumerate(image.symbols)
        ]
        self._console.table(
            SYMBOLS_LABEL,
            ["#", "Name", "value", "scnum", "type", "class", "numaux"],
            rows,
        )
