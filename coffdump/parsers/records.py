"""
COFF Record Decoders
=====================

Stateless, struct-based decoders for the four fixed-width COFF records.

Each ``decode_*`` function consumes exactly one record from the cursor's
current position and advances the cursor by the record size.  Decoders never
seek; positioning is the layout walker's job.  No semantic validation is
performed -- unknown magic numbers, flags, relocation types or storage
classes are returned verbatim.

Record layouts (big-endian, no padding)::

    FileHeader     20 bytes  >HHIIIHH
    SectionHeader  40 bytes  >8sIIIIIIHHI
    Relocation     16 bytes  >IIIHH
    Symbol         18 bytes  >8sIhHBB

References:
    - AT&T. (1989). UNIX System V Release 4 Programmer's Guide,
      "Common Object File Format".
    - Python ``struct`` module documentation.
"""

from __future__ import annotations

import struct

from coffdump.core.cursor import ByteCursor
from coffdump.core.models import (
    FileHeader,
    LiteralName,
    Relocation,
    SectionHeader,
    Symbol,
    TableOffsetName,
    decode_name_text,
)


# ---------------------------------------------------------------------------
# Record layouts
# ---------------------------------------------------------------------------

_FILE_HEADER = struct.Struct(">HHIIIHH")
_SECTION_HEADER = struct.Struct(">8sIIIIIIHHI")
_RELOCATION = struct.Struct(">IIIHH")
_SYMBOL = struct.Struct(">8sIhHBB")

# A long symbol name is four zero bytes followed by a big-endian offset.
_NAME_REFERENCE = struct.Struct(">II")

FILE_HEADER_SIZE: int = _FILE_HEADER.size
SECTION_HEADER_SIZE: int = _SECTION_HEADER.size
RELOCATION_SIZE: int = _RELOCATION.size
SYMBOL_SIZE: int = _SYMBOL.size

__all__ = [
    "FILE_HEADER_SIZE",
    "SECTION_HEADER_SIZE",
    "RELOCATION_SIZE",
    "SYMBOL_SIZE",
    "decode_file_header",
    "decode_section_header",
    "decode_relocation",
    "decode_symbol",
    "decode_symbol_name",
    "decode_name_text",
]


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

def decode_symbol_name(raw: bytes) -> LiteralName | TableOffsetName:
    """Classify an 8-byte symbol name field.

    If the first four bytes are all zero the name is a string-table
    reference and the remaining four bytes are its big-endian offset.
    Otherwise the eight bytes are the literal, NUL-padded name.

    Examples::

        >>> decode_symbol_name(bytes([0, 0, 0, 0, 0, 0, 0, 0x20])).offset
        32
        >>> decode_symbol_name(b"AB\\x00\\x00\\x00\\x00\\x00\\x00").text
        'AB'
    """
    zeroes, offset = _NAME_REFERENCE.unpack(raw)
    if zeroes == 0:
        return TableOffsetName(raw=raw, offset=offset)
    return LiteralName(raw=raw)


# ---------------------------------------------------------------------------
# Decoders
# ---------------------------------------------------------------------------

def decode_file_header(cursor: ByteCursor) -> FileHeader:
    """Decode a 20-byte file header at the cursor."""
    (
        magic, nscns, timdat, symptr, nsyms, opthdr, flags,
    ) = cursor.read_struct(_FILE_HEADER)
    return FileHeader(
        magic=magic,
        num_sections=nscns,
        timestamp=timdat,
        symbol_table_offset=symptr,
        num_symbols=nsyms,
        optional_header_size=opthdr,
        flags=flags,
    )


def decode_section_header(cursor: ByteCursor) -> SectionHeader:
    """Decode a 40-byte section header at the cursor."""
    (
        name, paddr, vaddr, size, scnptr, relptr, lnnoptr,
        nreloc, nlnno, flags,
    ) = cursor.read_struct(_SECTION_HEADER)
    return SectionHeader(
        name=LiteralName(raw=name),
        physical_addr=paddr,
        virtual_addr=vaddr,
        size=size,
        data_offset=scnptr,
        relocation_offset=relptr,
        line_number_offset=lnnoptr,
        num_relocations=nreloc,
        num_line_numbers=nlnno,
        flags=flags,
    )


def decode_relocation(cursor: ByteCursor) -> Relocation:
    """Decode a 16-byte relocation entry at the cursor."""
    vaddr, symndx, offset, rtype, extra = cursor.read_struct(_RELOCATION)
    return Relocation(
        virtual_addr=vaddr,
        symbol_index=symndx,
        offset=offset,
        type=rtype,
        extra=extra,
    )


def decode_symbol(cursor: ByteCursor) -> Symbol:
    """Decode an 18-byte symbol table entry at the cursor."""
    name, value, scnum, stype, sclass, numaux = cursor.read_struct(_SYMBOL)
    return Symbol(
        name=decode_symbol_name(name),
        value=value,
        section_number=scnum,
        type=stype,
        storage_class=sclass,
        num_aux_entries=numaux,
    )
